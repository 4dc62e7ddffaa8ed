"""
Sale posting model.

Tracks whether each completed sale reached the general ledger.
A sale whose journal entry could not be posted is kept here as
NEEDS_RECONCILIATION with the error, rather than being reported
as fully recorded.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    String, DateTime, Integer, Numeric, ForeignKey,
    Enum as SAEnum,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pos_ledger.models.base import Base
from pos_ledger.models.enums import PaymentMethod, SalePostingStatus


class SalePosting(Base):
    __tablename__ = "sale_postings"

    id: Mapped[int] = mapped_column(primary_key=True)
    sale_id: Mapped[int] = mapped_column(
        Integer, unique=True, nullable=False, index=True
    )
    user_id: Mapped[int] = mapped_column(Integer, nullable=False)
    journal_entry_id: Mapped[int | None] = mapped_column(
        ForeignKey("journal_entries.id"), nullable=True
    )
    status: Mapped[SalePostingStatus] = mapped_column(
        SAEnum(
            SalePostingStatus,
            name="sale_posting_status_enum",
            create_constraint=True,
        ),
        nullable=False,
    )
    payment_method: Mapped[PaymentMethod] = mapped_column(
        SAEnum(
            PaymentMethod,
            name="payment_method_enum",
            create_constraint=True,
        ),
        nullable=False,
    )
    total: Mapped[Decimal] = mapped_column(Numeric(15, 2), nullable=False)
    cost_of_goods_sold: Mapped[Decimal] = mapped_column(
        Numeric(15, 2), nullable=False
    )
    error_message: Mapped[str | None] = mapped_column(
        String(500), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    journal_entry: Mapped["JournalEntry | None"] = relationship()

    def __repr__(self) -> str:
        return f"<SalePosting sale={self.sale_id} ({self.status.value})>"
