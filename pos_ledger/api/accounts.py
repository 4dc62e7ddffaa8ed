"""
Chart of accounts API endpoints.

The API layer is thin: it handles HTTP concerns (status codes,
response formatting) and delegates to the services.
"""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from pos_ledger.api.params import day_end, day_start
from pos_ledger.exceptions import NotFoundError, ValidationError
from pos_ledger.models.base import get_db
from pos_ledger.models.enums import AccountType
from pos_ledger.schemas.ledger import (
    AccountCreate,
    AccountResponse,
    AccountUpdate,
    LedgerEntryResponse,
    SeedChartResponse,
)
from pos_ledger.schemas.statements import AccountBalance
from pos_ledger.services.chart_of_accounts import ChartOfAccountsService
from pos_ledger.services.ledger_service import LedgerService
from pos_ledger.services.statement_service import StatementService

router = APIRouter(prefix="/accounting/accounts", tags=["Accounts"])


@router.get("", response_model=list[AccountResponse])
def list_accounts(
    account_type: AccountType | None = None,
    active_only: bool = False,
    db: Session = Depends(get_db),
):
    """List accounts in creation order."""
    service = ChartOfAccountsService(db)
    return service.list_accounts(account_type=account_type, active_only=active_only)


@router.post("", response_model=AccountResponse, status_code=201)
def create_account(
    request: AccountCreate,
    db: Session = Depends(get_db),
):
    """
    Create a new ledger account.

    Every account must exist before entries can be posted to it.
    """
    service = ChartOfAccountsService(db)
    try:
        account = service.create_account(request)
        db.commit()
        return account
    except ValidationError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/seed", response_model=SeedChartResponse)
def seed_chart_of_accounts(db: Session = Depends(get_db)):
    """Insert the default chart. Does nothing once accounts exist."""
    service = ChartOfAccountsService(db)
    created = service.seed_default_chart_of_accounts()
    db.commit()
    return SeedChartResponse(created=created)


@router.get("/{account_id}", response_model=AccountResponse)
def get_account(
    account_id: int,
    db: Session = Depends(get_db),
):
    service = ChartOfAccountsService(db)
    account = service.get_account(account_id)
    if not account:
        raise HTTPException(
            status_code=404, detail=f"Account {account_id} not found"
        )
    return account


@router.patch("/{account_id}", response_model=AccountResponse)
def update_account(
    account_id: int,
    request: AccountUpdate,
    db: Session = Depends(get_db),
):
    service = ChartOfAccountsService(db)
    try:
        account = service.update_account(account_id, request)
        db.commit()
        return account
    except NotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/{account_id}/deactivate", response_model=AccountResponse)
def deactivate_account(
    account_id: int,
    db: Session = Depends(get_db),
):
    """Deactivate an account. Accounts are never deleted."""
    service = ChartOfAccountsService(db)
    try:
        account = service.deactivate_account(account_id)
        db.commit()
        return account
    except NotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/{account_id}/balance", response_model=AccountBalance)
def get_account_balance(
    account_id: int,
    as_of_date: date | None = None,
    db: Session = Depends(get_db),
):
    """
    Get the balance of an account, optionally as of a date.

    Balance is calculated from posted entries, never stored.
    """
    service = StatementService(db)
    try:
        return service.get_account_balance(account_id, day_end(as_of_date))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/{account_id}/ledger", response_model=list[LedgerEntryResponse])
def get_account_ledger(
    account_id: int,
    start_date: date | None = None,
    end_date: date | None = None,
    db: Session = Depends(get_db),
):
    """All lines posted to an account, newest first."""
    if not ChartOfAccountsService(db).get_account(account_id):
        raise HTTPException(
            status_code=404, detail=f"Account {account_id} not found"
        )
    service = LedgerService(db)
    return service.get_account_ledger(
        account_id, day_start(start_date), day_end(end_date)
    )
