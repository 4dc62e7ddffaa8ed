"""
Sequence counter model.

Each row is a named, monotonically increasing counter. Journal
entry numbers are drawn from the "journal_entry" row, which is
created together with the table so allocation never has to
insert it under concurrency.
"""

from sqlalchemy import BigInteger, String, DDL, event
from sqlalchemy.orm import Mapped, mapped_column

from pos_ledger.models.base import Base


JOURNAL_ENTRY_SEQUENCE = "journal_entry"


class SequenceCounter(Base):
    __tablename__ = "sequence_counters"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(
        String(50), unique=True, nullable=False
    )
    current_value: Mapped[int] = mapped_column(
        BigInteger, nullable=False, default=0
    )

    def __repr__(self) -> str:
        return f"<SequenceCounter {self.name}={self.current_value}>"


event.listen(
    SequenceCounter.__table__,
    "after_create",
    DDL(
        "INSERT INTO sequence_counters (name, current_value) "
        f"VALUES ('{JOURNAL_ENTRY_SEQUENCE}', 0)"
    ),
)
