"""
Pydantic schemas for the chart of accounts and the journal.

These define the API contract: what data comes in, what data
goes out. They are separate from the database models because
the API shape and the storage shape are often different.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from pos_ledger.models.enums import (
    AccountType,
    NormalBalance,
    JournalEntryStatus,
)


# --- Account Schemas ---

class AccountCreate(BaseModel):
    """Request to create a new ledger account."""
    code: str = Field(min_length=1, max_length=20)
    name: str = Field(min_length=1, max_length=100)
    account_type: AccountType
    subtype: str | None = Field(default=None, max_length=50)
    # Derived from account_type when omitted
    normal_balance: NormalBalance | None = None
    description: str | None = None
    is_active: bool = True
    is_system: bool = False
    parent_account_id: int | None = None


class AccountUpdate(BaseModel):
    """Partial update. Type and normal balance are fixed at creation."""
    code: str | None = Field(default=None, min_length=1, max_length=20)
    name: str | None = Field(default=None, min_length=1, max_length=100)
    subtype: str | None = Field(default=None, max_length=50)
    description: str | None = None
    is_active: bool | None = None
    parent_account_id: int | None = None


class AccountResponse(BaseModel):
    id: int
    code: str
    name: str
    account_type: AccountType
    subtype: str | None
    normal_balance: NormalBalance
    description: str | None
    is_active: bool
    is_system: bool
    parent_account_id: int | None
    created_at: datetime

    model_config = {"from_attributes": True}


class SeedChartResponse(BaseModel):
    created: int


# --- Journal Schemas ---

class JournalLineCreate(BaseModel):
    """One line of a journal entry. Exactly one side must be positive."""
    account_id: int
    debit: Decimal = Field(default=Decimal("0.00"), ge=0, decimal_places=2)
    credit: Decimal = Field(default=Decimal("0.00"), ge=0, decimal_places=2)
    description: str | None = None


class PostJournalEntryRequest(BaseModel):
    """
    A complete journal entry: header fields plus its lines.

    Line count and balance are checked by the LedgerService so
    that they surface as ledger errors, not schema errors.
    """
    description: str = Field(min_length=1)
    entry_date: datetime | None = None
    reference_type: str | None = Field(default=None, max_length=50)
    reference_id: int | None = None
    user_id: int
    notes: str | None = None
    entries: list[JournalLineCreate]


class LedgerEntryResponse(BaseModel):
    id: int
    journal_entry_id: int
    account_id: int
    debit: Decimal
    credit: Decimal
    description: str | None
    created_at: datetime

    model_config = {"from_attributes": True}


class JournalEntryResponse(BaseModel):
    id: int
    entry_number: str
    entry_date: datetime
    description: str
    reference_type: str | None
    reference_id: int | None
    user_id: int
    status: JournalEntryStatus
    notes: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class JournalEntryDetailResponse(JournalEntryResponse):
    """Journal entry together with its ledger lines."""
    lines: list[LedgerEntryResponse]
