"""
Ledger error taxonomy.

Every failure the accounting core can report is a LedgerError.
Validation, balance and not-found errors are caller-correctable
and are always raised before anything is written. Configuration
and persistence errors mean the books could not be updated.
"""

from decimal import Decimal


class LedgerError(Exception):
    """Base class for all accounting errors."""


class ValidationError(LedgerError, ValueError):
    """Malformed input: missing field, too few lines, unknown account."""


class BalanceMismatchError(LedgerError, ValueError):
    """Total debits and total credits of a journal entry differ."""

    def __init__(self, total_debits: Decimal, total_credits: Decimal):
        self.total_debits = total_debits
        self.total_credits = total_credits
        super().__init__(
            f"Journal entry does not balance: "
            f"debits={total_debits}, credits={total_credits}"
        )


class NotFoundError(LedgerError, ValueError):
    """An account or journal entry with the given id does not exist."""


class ConfigurationError(LedgerError):
    """A well-known account required by a posting rule is missing."""


class PersistenceError(LedgerError):
    """The store failed mid-write. Nothing from the operation was kept."""
