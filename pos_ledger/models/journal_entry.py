"""
Journal entry model.

A journal entry is the header of one financial event: a sale,
a supplier payment, a manual adjustment. Its lines (LedgerEntry)
carry the money. Once posted, an entry is never edited. The only
change allowed is the status flip to VOID, which keeps the lines
for audit but takes them out of every balance.
"""

from datetime import datetime

from sqlalchemy import (
    String, DateTime, Integer, Text,
    Enum as SAEnum,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pos_ledger.models.base import Base
from pos_ledger.models.enums import JournalEntryStatus


VALID_STATUS_TRANSITIONS: dict[JournalEntryStatus, set[JournalEntryStatus]] = {
    JournalEntryStatus.DRAFT: {
        JournalEntryStatus.POSTED,
        JournalEntryStatus.VOID,
    },
    JournalEntryStatus.POSTED: {JournalEntryStatus.VOID},
    JournalEntryStatus.VOID: set(),
}


class JournalEntry(Base):
    __tablename__ = "journal_entries"

    id: Mapped[int] = mapped_column(primary_key=True)
    entry_number: Mapped[str] = mapped_column(
        String(30), unique=True, nullable=False
    )
    entry_date: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow, index=True
    )
    description: Mapped[str] = mapped_column(Text, nullable=False)
    reference_type: Mapped[str | None] = mapped_column(
        String(50), nullable=True
    )
    reference_id: Mapped[int | None] = mapped_column(
        Integer, nullable=True
    )
    user_id: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[JournalEntryStatus] = mapped_column(
        SAEnum(
            JournalEntryStatus,
            name="journal_entry_status_enum",
            create_constraint=True,
        ),
        nullable=False,
        default=JournalEntryStatus.POSTED,
        index=True,
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    lines: Mapped[list["LedgerEntry"]] = relationship(
        back_populates="journal_entry",
        cascade="all, delete-orphan",
        order_by="LedgerEntry.id",
    )

    def can_transition_to(self, new_status: JournalEntryStatus) -> bool:
        return new_status in VALID_STATUS_TRANSITIONS.get(self.status, set())

    def __repr__(self) -> str:
        return f"<JournalEntry {self.entry_number} ({self.status.value})>"
