"""
Sale service: turns completed sales into journal entries.

Accounting for a sale:
    DEBIT  Cash                (asset increases, money received)
    CREDIT Sales Revenue       (revenue earned)
    DEBIT  Cost of Goods Sold  (expense recognised)
    CREDIT Inventory           (asset decreases, goods left the shelf)

The entry balances by construction. The caller's job is to hand
over a correct cost_of_goods_sold.
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from pos_ledger.exceptions import ConfigurationError, LedgerError
from pos_ledger.models.enums import SalePostingStatus
from pos_ledger.models.journal_entry import JournalEntry
from pos_ledger.models.ledger_account import LedgerAccount
from pos_ledger.models.sale_posting import SalePosting
from pos_ledger.schemas.ledger import JournalLineCreate, PostJournalEntryRequest
from pos_ledger.schemas.sale import SaleRecordRequest
from pos_ledger.services.chart_of_accounts import ChartOfAccountsService
from pos_ledger.services.ledger_service import LedgerService

logger = logging.getLogger(__name__)


# Posting role -> account code. The default chart seeds all four.
SALE_ACCOUNT_CODES: dict[str, str] = {
    "cash": "1000",
    "sales_revenue": "4000",
    "cost_of_goods_sold": "5000",
    "inventory": "1200",
}

SALE_REFERENCE_TYPE = "sale"


class SaleJournalTranslator:

    def __init__(self, db: Session):
        self.db = db
        self.chart = ChartOfAccountsService(db)
        self.ledger_service = LedgerService(db)

    def resolve_accounts(self) -> dict[str, LedgerAccount]:
        """
        Look up the accounts a sale posts to.

        Raises ConfigurationError naming every missing code. A
        sale must never be silently left out of the books.
        """
        accounts = {}
        missing = []
        for role, code in SALE_ACCOUNT_CODES.items():
            account = self.chart.get_account_by_code(code)
            if account is None:
                missing.append(code)
            else:
                accounts[role] = account

        if missing:
            raise ConfigurationError(
                "Required accounts not found in chart of accounts: "
                + ", ".join(missing)
            )
        return accounts

    def record_sale(self, request: SaleRecordRequest) -> JournalEntry:
        accounts = self.resolve_accounts()

        lines = [
            JournalLineCreate(
                account_id=accounts["cash"].id,
                debit=request.total,
                description="Cash received from sale",
            ),
            JournalLineCreate(
                account_id=accounts["sales_revenue"].id,
                credit=request.total,
                description="Revenue from sale",
            ),
        ]
        # A line must be single-sided, so a zero cost sale
        # (e.g. a service) gets no COGS pair at all.
        if request.cost_of_goods_sold > 0:
            lines += [
                JournalLineCreate(
                    account_id=accounts["cost_of_goods_sold"].id,
                    debit=request.cost_of_goods_sold,
                    description="Cost of goods sold",
                ),
                JournalLineCreate(
                    account_id=accounts["inventory"].id,
                    credit=request.cost_of_goods_sold,
                    description="Inventory reduction",
                ),
            ]

        return self.ledger_service.post_journal_entry(PostJournalEntryRequest(
            description=(
                f"Sale #{request.sale_id} - {request.payment_method.value}"
            ),
            reference_type=SALE_REFERENCE_TYPE,
            reference_id=request.sale_id,
            user_id=request.user_id,
            entries=lines,
        ))


class SaleLedgerService:
    """
    Records each completed sale in the ledger exactly once.

    A sale whose posting fails is not reported as recorded: it is
    stored as NEEDS_RECONCILIATION with the error so someone can
    fix the books. Calling record_sale again for the same sale
    retries the posting; a sale already recorded is returned as is.

    The journal entry and the posting row are written in one
    savepoint. When two checkouts race on the same sale, the
    unique sale_id lets one of them win; the other rolls its
    entry back and returns the winner's posting.
    """

    def __init__(self, db: Session):
        self.db = db
        self.translator = SaleJournalTranslator(db)

    def get_posting(self, sale_id: int) -> SalePosting | None:
        return self.db.execute(
            select(SalePosting).where(SalePosting.sale_id == sale_id)
        ).scalar_one_or_none()

    def record_sale(self, request: SaleRecordRequest) -> SalePosting:
        posting = self.get_posting(request.sale_id)
        if posting and posting.status == SalePostingStatus.RECORDED:
            return posting

        try:
            with self.db.begin_nested():
                return self._post(posting, request)
        except IntegrityError:
            # Another checkout inserted this sale's posting first; its
            # journal entry stands and ours was rolled back.
            existing = self.get_posting(request.sale_id)
            if existing is None:
                raise
            logger.info(
                "Sale #%s was recorded concurrently, returning existing posting",
                request.sale_id,
            )
            return existing

    def _post(
        self, posting: SalePosting | None, request: SaleRecordRequest
    ) -> SalePosting:
        try:
            entry = self.translator.record_sale(request)
        except LedgerError as exc:
            logger.error(
                "Sale #%s not recorded in the ledger, needs reconciliation: %s",
                request.sale_id, exc,
            )
            return self._save(
                posting,
                request,
                SalePostingStatus.NEEDS_RECONCILIATION,
                error_message=str(exc)[:500],
            )

        return self._save(
            posting,
            request,
            SalePostingStatus.RECORDED,
            journal_entry_id=entry.id,
        )

    def list_unreconciled(self) -> list[SalePosting]:
        postings = self.db.execute(
            select(SalePosting)
            .where(SalePosting.status == SalePostingStatus.NEEDS_RECONCILIATION)
            .order_by(SalePosting.id)
        ).scalars().all()
        return list(postings)

    def _save(
        self,
        posting: SalePosting | None,
        request: SaleRecordRequest,
        status: SalePostingStatus,
        journal_entry_id: int | None = None,
        error_message: str | None = None,
    ) -> SalePosting:
        if posting is None:
            posting = SalePosting(sale_id=request.sale_id)
            self.db.add(posting)

        posting.user_id = request.user_id
        posting.payment_method = request.payment_method
        posting.total = request.total
        posting.cost_of_goods_sold = request.cost_of_goods_sold
        posting.status = status
        posting.journal_entry_id = journal_entry_id
        posting.error_message = error_message
        self.db.flush()
        return posting
