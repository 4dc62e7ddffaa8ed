"""Business logic services."""

from pos_ledger.services.chart_of_accounts import ChartOfAccountsService
from pos_ledger.services.ledger_service import LedgerService
from pos_ledger.services.sale_service import SaleJournalTranslator, SaleLedgerService
from pos_ledger.services.sequence_service import SequenceService
from pos_ledger.services.statement_service import StatementService

__all__ = [
    "ChartOfAccountsService",
    "LedgerService",
    "SaleJournalTranslator",
    "SaleLedgerService",
    "SequenceService",
    "StatementService",
]
