"""
Database models package.

All models must be imported here so that Alembic can discover
them through Base.metadata when generating migrations.
"""

from pos_ledger.models.base import Base
from pos_ledger.models.enums import (
    AccountType,
    NormalBalance,
    JournalEntryStatus,
    PaymentMethod,
    SalePostingStatus,
)
from pos_ledger.models.ledger_account import LedgerAccount
from pos_ledger.models.journal_entry import JournalEntry
from pos_ledger.models.ledger_entry import LedgerEntry
from pos_ledger.models.sequence_counter import SequenceCounter
from pos_ledger.models.sale_posting import SalePosting

__all__ = [
    "Base",
    "AccountType",
    "NormalBalance",
    "JournalEntryStatus",
    "PaymentMethod",
    "SalePostingStatus",
    "LedgerAccount",
    "JournalEntry",
    "LedgerEntry",
    "SequenceCounter",
    "SalePosting",
]
