"""
Schemas for balances and financial statements.

Each statement kind has its own model with explicit fields so
that consumers never have to guess at the shape of a report.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from pos_ledger.models.enums import AccountType


class AccountBalance(BaseModel):
    """Signed balance of one account plus the raw totals behind it."""
    account_id: int
    account_code: str
    balance: Decimal
    debit_total: Decimal
    credit_total: Decimal


class StatementLine(BaseModel):
    account_id: int
    code: str
    name: str
    account_type: AccountType
    subtype: str | None
    balance: Decimal


class StatementSection(BaseModel):
    accounts: list[StatementLine] = Field(default_factory=list)
    total: Decimal = Decimal("0.00")


class ProfitAndLoss(BaseModel):
    start_date: datetime
    end_date: datetime
    revenue: StatementSection
    expenses: StatementSection
    net_income: Decimal


class BalanceSheet(BaseModel):
    """
    Assets, liabilities and equity as of a date.

    assets - liabilities - equity is not forced to zero: profit
    is not closed into retained earnings automatically, so the
    difference is left for the reader to display.
    """
    as_of_date: datetime
    assets: StatementSection
    liabilities: StatementSection
    equity: StatementSection


class CashFlowItem(BaseModel):
    description: str
    amount: Decimal


class CashFlowSection(BaseModel):
    items: list[CashFlowItem] = Field(default_factory=list)
    total: Decimal = Decimal("0.00")


class CashFlowStatement(BaseModel):
    start_date: datetime
    end_date: datetime
    operating_activities: CashFlowSection
    investing_activities: CashFlowSection
    financing_activities: CashFlowSection
    net_cash_flow: Decimal
