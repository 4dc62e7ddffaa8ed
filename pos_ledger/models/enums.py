"""
Shared enumerations for database models.

Mapping Python enums to database enums means an invalid account
type or entry status is rejected by the database, not only by
Python validation.
"""

import enum


class AccountType(str, enum.Enum):
    """The five fundamental accounting categories."""
    ASSET = "asset"
    LIABILITY = "liability"
    EQUITY = "equity"
    REVENUE = "revenue"
    EXPENSE = "expense"


class NormalBalance(str, enum.Enum):
    """Side on which an account's balance increases."""
    DEBIT = "debit"
    CREDIT = "credit"


class JournalEntryStatus(str, enum.Enum):
    DRAFT = "draft"
    POSTED = "posted"
    VOID = "void"


class PaymentMethod(str, enum.Enum):
    CASH = "cash"
    MPESA = "mpesa"
    CREDIT = "credit"


class SalePostingStatus(str, enum.Enum):
    """Whether a completed sale made it into the books."""
    RECORDED = "recorded"
    NEEDS_RECONCILIATION = "needs_reconciliation"


# Asset and expense accounts grow with debits; everything else
# grows with credits.
DEFAULT_NORMAL_BALANCE: dict[AccountType, NormalBalance] = {
    AccountType.ASSET: NormalBalance.DEBIT,
    AccountType.EXPENSE: NormalBalance.DEBIT,
    AccountType.LIABILITY: NormalBalance.CREDIT,
    AccountType.EQUITY: NormalBalance.CREDIT,
    AccountType.REVENUE: NormalBalance.CREDIT,
}
