"""
Sale recording endpoints.

Checkout calls POST /accounting/sales once per completed sale,
after stock has been deducted. A sale that could not be booked
comes back with status 202 and needs_reconciliation instead of
being reported as recorded.
"""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from pos_ledger.models.base import get_db
from pos_ledger.models.enums import SalePostingStatus
from pos_ledger.schemas.sale import SalePostingResponse, SaleRecordRequest
from pos_ledger.services.sale_service import SaleLedgerService

router = APIRouter(prefix="/accounting/sales", tags=["Sales"])


@router.post("", response_model=SalePostingResponse, status_code=201)
def record_sale(
    request: SaleRecordRequest,
    response: Response,
    db: Session = Depends(get_db),
):
    service = SaleLedgerService(db)
    posting = service.record_sale(request)
    db.commit()
    if posting.status == SalePostingStatus.NEEDS_RECONCILIATION:
        response.status_code = 202
    return posting


@router.get("/unreconciled", response_model=list[SalePostingResponse])
def list_unreconciled_sales(db: Session = Depends(get_db)):
    """Sales that are not yet reflected in the books."""
    service = SaleLedgerService(db)
    return service.list_unreconciled()
