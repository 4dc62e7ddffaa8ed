"""
Journal API endpoints.

Manual journal entries go through the same posting engine as
sales, so they are held to the same balance rules.
"""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from pos_ledger.api.params import day_end, day_start
from pos_ledger.exceptions import (
    BalanceMismatchError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from pos_ledger.models.base import get_db
from pos_ledger.schemas.ledger import (
    JournalEntryDetailResponse,
    JournalEntryResponse,
    PostJournalEntryRequest,
)
from pos_ledger.services.ledger_service import LedgerService

router = APIRouter(prefix="/accounting/journal-entries", tags=["Journal"])


@router.get("", response_model=list[JournalEntryResponse])
def list_journal_entries(
    start_date: date | None = None,
    end_date: date | None = None,
    db: Session = Depends(get_db),
):
    """Journal entries in the date range, newest first."""
    service = LedgerService(db)
    return service.list_journal_entries(day_start(start_date), day_end(end_date))


@router.get("/{entry_id}", response_model=JournalEntryDetailResponse)
def get_journal_entry(
    entry_id: int,
    db: Session = Depends(get_db),
):
    """A journal entry together with its lines."""
    service = LedgerService(db)
    entry = service.get_journal_entry(entry_id)
    if not entry:
        raise HTTPException(
            status_code=404, detail=f"Journal entry {entry_id} not found"
        )
    return entry


@router.post("", response_model=JournalEntryDetailResponse, status_code=201)
def post_journal_entry(
    request: PostJournalEntryRequest,
    db: Session = Depends(get_db),
):
    """
    Post a manual journal entry.

    Needs at least two single-sided lines whose debits and
    credits balance. A rejected entry leaves nothing behind.
    """
    service = LedgerService(db)
    try:
        entry = service.post_journal_entry(request)
        db.commit()
        return entry
    except BalanceMismatchError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail={
            "message": str(e),
            "total_debits": str(e.total_debits),
            "total_credits": str(e.total_credits),
        })
    except ValidationError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except PersistenceError as e:
        db.rollback()
        raise HTTPException(status_code=503, detail=str(e))


@router.post("/{entry_id}/void", response_model=JournalEntryResponse)
def void_journal_entry(
    entry_id: int,
    db: Session = Depends(get_db),
):
    """Void a posted entry. Its lines are kept but stop counting."""
    service = LedgerService(db)
    try:
        entry = service.void_journal_entry(entry_id)
        db.commit()
        return entry
    except NotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
