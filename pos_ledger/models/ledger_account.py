"""
Ledger account model (chart of accounts).

Cash, inventory, sales revenue, rent: every bucket money can sit
in is a ledger account, and every ledger line is posted against
one of them.
"""

from datetime import datetime

from sqlalchemy import (
    String, Boolean, DateTime, Text, ForeignKey,
    Enum as SAEnum,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pos_ledger.models.base import Base
from pos_ledger.models.enums import AccountType, NormalBalance


class LedgerAccount(Base):
    """
    A single account in the chart of accounts.

    An account is never deleted, only deactivated via
    is_active=False. System accounts (is_system=True) are seeded
    and referenced by posting rules, so they stay active.
    """

    __tablename__ = "accounts"

    id: Mapped[int] = mapped_column(primary_key=True)
    code: Mapped[str] = mapped_column(
        String(20), unique=True, nullable=False
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    account_type: Mapped[AccountType] = mapped_column(
        SAEnum(
            AccountType,
            name="account_type_enum",
            create_constraint=True,
        ),
        nullable=False,
        index=True,
    )
    subtype: Mapped[str | None] = mapped_column(String(50), nullable=True)
    normal_balance: Mapped[NormalBalance] = mapped_column(
        SAEnum(
            NormalBalance,
            name="normal_balance_enum",
            create_constraint=True,
        ),
        nullable=False,
    )
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True
    )
    is_system: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    parent_account_id: Mapped[int | None] = mapped_column(
        ForeignKey("accounts.id"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )

    parent: Mapped["LedgerAccount | None"] = relationship(
        remote_side=[id]
    )
    entries: Mapped[list["LedgerEntry"]] = relationship(
        back_populates="account"
    )

    def __repr__(self) -> str:
        return f"<LedgerAccount {self.code} {self.name} ({self.account_type.value})>"
