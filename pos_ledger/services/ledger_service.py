"""
Ledger service: the posting engine.

This service enforces the fundamental rules:
1. A journal entry has at least two lines
2. Every line is single-sided (a debit or a credit, not both)
3. Every referenced account exists and is active
4. Total debits equal total credits (within one cent)
5. Entry number, header and lines are written as one unit

No other service writes ledger lines. Every financial event,
sales included, is posted through post_journal_entry().
"""

import logging
from datetime import datetime
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pos_ledger.config import get_settings
from pos_ledger.exceptions import (
    BalanceMismatchError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from pos_ledger.models.enums import JournalEntryStatus
from pos_ledger.models.journal_entry import JournalEntry
from pos_ledger.models.ledger_account import LedgerAccount
from pos_ledger.models.ledger_entry import LedgerEntry
from pos_ledger.models.sequence_counter import JOURNAL_ENTRY_SEQUENCE
from pos_ledger.schemas.ledger import PostJournalEntryRequest
from pos_ledger.services.sequence_service import SequenceService

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")

# Absorbs rounding in amounts computed upstream (cart totals,
# cost of goods sold). A difference of exactly one cent passes.
BALANCE_TOLERANCE = Decimal("0.01")


def to_money(value) -> Decimal:
    """
    Normalise an amount to a two-decimal Decimal.

    SUM() over a NUMERIC column comes back as a float on SQLite
    and as a Decimal on PostgreSQL; going through str() and
    quantize() gives the same exact value on both.
    """
    if value is None:
        return Decimal("0.00")
    return Decimal(str(value)).quantize(CENT)


def date_range_filter(column, start_date=None, end_date=None) -> list:
    """Inclusive [start_date, end_date] conditions on a date column."""
    conditions = []
    if start_date is not None:
        conditions.append(column >= start_date)
    if end_date is not None:
        conditions.append(column <= end_date)
    return conditions


class LedgerService:
    """
    All journal postings pass through this service.

    The service takes a database session as a constructor
    argument. It only flushes; the caller commits or rolls back.
    The entry itself is written inside a savepoint, so a storage
    failure undoes the half-written entry and its number while
    leaving the caller's earlier work in the session intact.
    """

    def __init__(self, db: Session):
        self.db = db
        self.sequence_service = SequenceService(db)
        self.settings = get_settings()

    def post_journal_entry(self, request: PostJournalEntryRequest) -> JournalEntry:
        """
        Validate and post a journal entry with its lines.

        All checks run before anything is written. Raises
        ValidationError for malformed lines or unknown accounts,
        BalanceMismatchError when the entry does not balance,
        PersistenceError when the store fails mid-write.
        """
        lines = request.entries

        # --- Validate line shape ---
        if len(lines) < 2:
            raise ValidationError(
                f"A journal entry needs at least 2 lines, got {len(lines)}"
            )

        for index, line in enumerate(lines, start=1):
            if line.debit < 0 or line.credit < 0:
                raise ValidationError(
                    f"Line {index}: amounts cannot be negative "
                    f"(debit={line.debit}, credit={line.credit})"
                )
            if (line.debit > 0) == (line.credit > 0):
                raise ValidationError(
                    f"Line {index}: exactly one of debit or credit must be "
                    f"positive (debit={line.debit}, credit={line.credit})"
                )

        # --- Validate all accounts ---
        account_ids = {line.account_id for line in lines}
        accounts = self.db.execute(
            select(LedgerAccount).where(LedgerAccount.id.in_(account_ids))
        ).scalars().all()
        accounts_by_id = {a.id: a for a in accounts}

        missing = account_ids - set(accounts_by_id.keys())
        if missing:
            raise ValidationError(f"Accounts not found: {sorted(missing)}")

        for account in accounts_by_id.values():
            if not account.is_active:
                raise ValidationError(f"Account {account.code} is not active")

        # --- Enforce balance rule ---
        total_debits = to_money(sum(line.debit for line in lines))
        total_credits = to_money(sum(line.credit for line in lines))

        if abs(total_debits - total_credits) > BALANCE_TOLERANCE:
            logger.warning(
                "Rejected unbalanced entry '%s': debits=%s credits=%s",
                request.description, total_debits, total_credits,
            )
            raise BalanceMismatchError(total_debits, total_credits)

        # --- Allocate number and write header + lines as one unit ---
        try:
            with self.db.begin_nested():
                number = self.sequence_service.next_value(JOURNAL_ENTRY_SEQUENCE)
                entry = JournalEntry(
                    entry_number=self.format_entry_number(number),
                    entry_date=request.entry_date or datetime.utcnow(),
                    description=request.description,
                    reference_type=request.reference_type,
                    reference_id=request.reference_id,
                    user_id=request.user_id,
                    notes=request.notes,
                    status=JournalEntryStatus.POSTED,
                )
                for line in lines:
                    entry.lines.append(LedgerEntry(
                        account_id=line.account_id,
                        debit=to_money(line.debit),
                        credit=to_money(line.credit),
                        description=line.description or request.description,
                    ))
                self.db.add(entry)
                self.db.flush()
        except SQLAlchemyError as exc:
            logger.exception(
                "Posting '%s' failed, entry rolled back", request.description
            )
            raise PersistenceError(
                f"Could not post journal entry: {exc.__class__.__name__}"
            ) from exc

        logger.info(
            "Posted %s '%s' (%d lines, %s)",
            entry.entry_number, entry.description, len(lines), total_debits,
        )
        return entry

    def format_entry_number(self, number: int) -> str:
        prefix = self.settings.ENTRY_NUMBER_PREFIX
        width = self.settings.ENTRY_NUMBER_WIDTH
        return f"{prefix}-{number:0{width}d}"

    def void_journal_entry(self, entry_id: int) -> JournalEntry:
        """
        Mark a journal entry as void.

        The lines are left untouched for audit; void entries are
        simply excluded from balances and statements. No
        reversing entry is generated.
        """
        entry = self.db.get(JournalEntry, entry_id)
        if not entry:
            raise NotFoundError(f"Journal entry {entry_id} not found")

        if not entry.can_transition_to(JournalEntryStatus.VOID):
            raise ValidationError(
                f"Journal entry {entry.entry_number} cannot be voided "
                f"(status: {entry.status.value})"
            )

        entry.status = JournalEntryStatus.VOID
        self.db.flush()
        logger.info("Voided %s", entry.entry_number)
        return entry

    def get_journal_entry(self, entry_id: int) -> JournalEntry | None:
        return self.db.get(JournalEntry, entry_id)

    def list_journal_entries(
        self,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
    ) -> list[JournalEntry]:
        """Journal entries in the date range, newest first."""
        entries = self.db.execute(
            select(JournalEntry)
            .where(*date_range_filter(JournalEntry.entry_date, start_date, end_date))
            .order_by(JournalEntry.entry_date.desc(), JournalEntry.id.desc())
        ).scalars().all()
        return list(entries)

    def get_journal_lines(self, entry_id: int) -> list[LedgerEntry]:
        lines = self.db.execute(
            select(LedgerEntry)
            .where(LedgerEntry.journal_entry_id == entry_id)
            .order_by(LedgerEntry.id)
        ).scalars().all()
        return list(lines)

    def get_account_ledger(
        self,
        account_id: int,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
    ) -> list[LedgerEntry]:
        """
        All lines posted to an account, newest first.

        The date range applies to the parent entry's date. Lines
        of void entries are included; the ledger is a history.
        """
        lines = self.db.execute(
            select(LedgerEntry)
            .join(JournalEntry, LedgerEntry.journal_entry_id == JournalEntry.id)
            .where(
                LedgerEntry.account_id == account_id,
                *date_range_filter(JournalEntry.entry_date, start_date, end_date),
            )
            .order_by(JournalEntry.entry_date.desc(), LedgerEntry.id.desc())
        ).scalars().all()
        return list(lines)
