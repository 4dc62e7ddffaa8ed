"""
Sequence service: monotonic numbers from locked counter rows.

Entry numbers are never derived from max(entry_number) + 1. Two
concurrent postings would read the same maximum and produce the
same number. Instead the counter row is incremented with a single
UPDATE, which takes a row lock held until the caller's
transaction ends; the next writer waits and then sees the new
value. If the caller rolls back, the increment rolls back too.
"""

import logging

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from pos_ledger.exceptions import PersistenceError
from pos_ledger.models.sequence_counter import SequenceCounter

logger = logging.getLogger(__name__)


class SequenceService:

    def __init__(self, db: Session):
        self.db = db

    def next_value(self, name: str) -> int:
        """Increment the named counter and return its new value."""
        result = self.db.execute(
            update(SequenceCounter)
            .where(SequenceCounter.name == name)
            .values(current_value=SequenceCounter.current_value + 1)
        )
        if result.rowcount != 1:
            raise PersistenceError(f"Sequence '{name}' is not initialised")

        value = self.db.execute(
            select(SequenceCounter.current_value)
            .where(SequenceCounter.name == name)
        ).scalar_one()
        logger.debug("Allocated %s=%d", name, value)
        return value

    def current_value(self, name: str) -> int | None:
        """Read a counter without incrementing it."""
        return self.db.execute(
            select(SequenceCounter.current_value)
            .where(SequenceCounter.name == name)
        ).scalar_one_or_none()
