"""
Financial statement endpoints.

Report parameters are calendar dates and cover whole days.
"""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from pos_ledger.api.params import day_end, day_start
from pos_ledger.models.base import get_db
from pos_ledger.schemas.statements import (
    BalanceSheet,
    CashFlowStatement,
    ProfitAndLoss,
)
from pos_ledger.services.statement_service import StatementService

router = APIRouter(prefix="/accounting/reports", tags=["Reports"])


def _check_period(start_date: date, end_date: date) -> None:
    if start_date > end_date:
        raise HTTPException(
            status_code=400, detail="start_date must not be after end_date"
        )


@router.get("/profit-and-loss", response_model=ProfitAndLoss)
def profit_and_loss(
    start_date: date,
    end_date: date,
    db: Session = Depends(get_db),
):
    _check_period(start_date, end_date)
    service = StatementService(db)
    return service.generate_profit_and_loss(
        day_start(start_date), day_end(end_date)
    )


@router.get("/balance-sheet", response_model=BalanceSheet)
def balance_sheet(
    as_of_date: date,
    db: Session = Depends(get_db),
):
    service = StatementService(db)
    return service.generate_balance_sheet(day_end(as_of_date))


@router.get("/cash-flow", response_model=CashFlowStatement)
def cash_flow(
    start_date: date,
    end_date: date,
    db: Session = Depends(get_db),
):
    _check_period(start_date, end_date)
    service = StatementService(db)
    return service.generate_cash_flow_statement(
        day_start(start_date), day_end(end_date)
    )
