"""
Health check endpoint.

Reports application status, database connectivity and whether
the posted ledger balances as a whole.
"""

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pos_ledger.models.base import get_db
from pos_ledger.services.statement_service import StatementService

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check(db: Session = Depends(get_db)):
    """
    Return application health status including database connectivity.

    If the database cannot be reached the status is "degraded";
    a ledger whose debits and credits differ is reported as well.
    """
    ledger_status = "unknown"
    try:
        db.execute(text("SELECT 1"))
        db_status = "healthy"
        integrity = StatementService(db).check_integrity()
        ledger_status = "balanced" if integrity["is_balanced"] else "unbalanced"
    except SQLAlchemyError:
        db_status = "unhealthy"

    return {
        "status": "healthy" if db_status == "healthy" else "degraded",
        "service": "pos-ledger",
        "database": db_status,
        "ledger": ledger_status,
    }
