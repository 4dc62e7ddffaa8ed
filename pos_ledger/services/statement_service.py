"""
Statement service: balances and financial statements.

Everything here is derived on demand from posted ledger lines.
Nothing is stored and nothing is written, so reading a report
can never change the books.

Only POSTED entries count. Void entries keep their lines for
audit but contribute nothing, and drafts do not count until
they are posted.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from pos_ledger.exceptions import NotFoundError
from pos_ledger.models.enums import (
    AccountType,
    JournalEntryStatus,
    NormalBalance,
)
from pos_ledger.models.journal_entry import JournalEntry
from pos_ledger.models.ledger_account import LedgerAccount
from pos_ledger.models.ledger_entry import LedgerEntry
from pos_ledger.schemas.statements import (
    AccountBalance,
    BalanceSheet,
    CashFlowItem,
    CashFlowSection,
    CashFlowStatement,
    ProfitAndLoss,
    StatementLine,
    StatementSection,
)
from pos_ledger.services.ledger_service import date_range_filter, to_money


def signed_balance(
    normal_balance: NormalBalance, debit_total: Decimal, credit_total: Decimal
) -> Decimal:
    """
    Turn raw totals into a balance on the account's normal side.

    Debit-normal (assets, expenses): debits - credits.
    Credit-normal (liabilities, equity, revenue): credits - debits.
    """
    if normal_balance == NormalBalance.DEBIT:
        return debit_total - credit_total
    return credit_total - debit_total


class StatementService:

    def __init__(self, db: Session):
        self.db = db

    def _totals_by_account(
        self,
        account_ids: list[int],
        start_date: datetime | None = None,
        end_date: datetime | None = None,
    ) -> dict[int, tuple[Decimal, Decimal]]:
        """Posted (debit, credit) totals per account in one query."""
        if not account_ids:
            return {}

        rows = self.db.execute(
            select(
                LedgerEntry.account_id,
                func.coalesce(func.sum(LedgerEntry.debit), 0),
                func.coalesce(func.sum(LedgerEntry.credit), 0),
            )
            .select_from(LedgerEntry)
            .join(JournalEntry, LedgerEntry.journal_entry_id == JournalEntry.id)
            .where(
                LedgerEntry.account_id.in_(account_ids),
                JournalEntry.status == JournalEntryStatus.POSTED,
                *date_range_filter(JournalEntry.entry_date, start_date, end_date),
            )
            .group_by(LedgerEntry.account_id)
        ).all()

        return {
            account_id: (to_money(debits), to_money(credits))
            for account_id, debits, credits in rows
        }

    def get_account_balance(
        self, account_id: int, as_of_date: datetime | None = None
    ) -> AccountBalance:
        """
        Calculate an account's balance from its posted lines.

        With as_of_date, only entries dated on or before it count.
        """
        account = self.db.get(LedgerAccount, account_id)
        if not account:
            raise NotFoundError(f"Account {account_id} not found")

        zero = Decimal("0.00")
        debit_total, credit_total = self._totals_by_account(
            [account.id], end_date=as_of_date
        ).get(account.id, (zero, zero))

        return AccountBalance(
            account_id=account.id,
            account_code=account.code,
            balance=signed_balance(
                account.normal_balance, debit_total, credit_total
            ),
            debit_total=debit_total,
            credit_total=credit_total,
        )

    def _section(
        self,
        account_type: AccountType,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
    ) -> StatementSection:
        accounts = self.db.execute(
            select(LedgerAccount)
            .where(
                LedgerAccount.account_type == account_type,
                LedgerAccount.is_active.is_(True),
            )
            .order_by(LedgerAccount.code)
        ).scalars().all()

        totals = self._totals_by_account(
            [a.id for a in accounts], start_date, end_date
        )

        zero = Decimal("0.00")
        lines = []
        for account in accounts:
            debit_total, credit_total = totals.get(account.id, (zero, zero))
            lines.append(StatementLine(
                account_id=account.id,
                code=account.code,
                name=account.name,
                account_type=account.account_type,
                subtype=account.subtype,
                balance=signed_balance(
                    account.normal_balance, debit_total, credit_total
                ),
            ))

        return StatementSection(
            accounts=lines,
            total=sum((line.balance for line in lines), zero),
        )

    def generate_profit_and_loss(
        self, start_date: datetime, end_date: datetime
    ) -> ProfitAndLoss:
        """Revenue and expenses for entries dated within the period."""
        revenue = self._section(AccountType.REVENUE, start_date, end_date)
        expenses = self._section(AccountType.EXPENSE, start_date, end_date)

        return ProfitAndLoss(
            start_date=start_date,
            end_date=end_date,
            revenue=revenue,
            expenses=expenses,
            net_income=revenue.total - expenses.total,
        )

    def generate_balance_sheet(self, as_of_date: datetime) -> BalanceSheet:
        return BalanceSheet(
            as_of_date=as_of_date,
            assets=self._section(AccountType.ASSET, end_date=as_of_date),
            liabilities=self._section(AccountType.LIABILITY, end_date=as_of_date),
            equity=self._section(AccountType.EQUITY, end_date=as_of_date),
        )

    def generate_cash_flow_statement(
        self, start_date: datetime, end_date: datetime
    ) -> CashFlowStatement:
        """
        Simplified indirect-method cash flow.

        Operating activities are net income for the period.
        Capital transactions are not modelled yet, so investing
        and financing are always empty with zero totals.
        """
        pnl = self.generate_profit_and_loss(start_date, end_date)

        operating = CashFlowSection(
            items=[CashFlowItem(description="Net Income", amount=pnl.net_income)],
            total=pnl.net_income,
        )
        investing = CashFlowSection()
        financing = CashFlowSection()

        return CashFlowStatement(
            start_date=start_date,
            end_date=end_date,
            operating_activities=operating,
            investing_activities=investing,
            financing_activities=financing,
            net_cash_flow=operating.total + investing.total + financing.total,
        )

    def check_integrity(self) -> dict:
        """
        Verify that the posted ledger as a whole balances.

        Useful as a health check: if total debits ever differ
        from total credits, something bypassed the posting rules.
        """
        debits, credits = self.db.execute(
            select(
                func.coalesce(func.sum(LedgerEntry.debit), 0),
                func.coalesce(func.sum(LedgerEntry.credit), 0),
            )
            .select_from(LedgerEntry)
            .join(JournalEntry, LedgerEntry.journal_entry_id == JournalEntry.id)
            .where(JournalEntry.status == JournalEntryStatus.POSTED)
        ).one()

        total_debits = to_money(debits)
        total_credits = to_money(credits)
        return {
            "total_debits": total_debits,
            "total_credits": total_credits,
            "difference": total_debits - total_credits,
            "is_balanced": total_debits == total_credits,
        }
