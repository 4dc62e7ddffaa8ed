"""
Chart of accounts service.

Owns the set of ledger accounts: creation, lookup, updates and
the default chart seeded on first start. Accounts are never
deleted, only deactivated. System accounts keep their code and
stay active because posting rules look them up by code.
"""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from pos_ledger.exceptions import NotFoundError, ValidationError
from pos_ledger.models.enums import AccountType, DEFAULT_NORMAL_BALANCE
from pos_ledger.models.ledger_account import LedgerAccount
from pos_ledger.schemas.ledger import AccountCreate, AccountUpdate

logger = logging.getLogger(__name__)


def _account(code, name, account_type, subtype, description, is_system=True):
    return AccountCreate(
        code=code,
        name=name,
        account_type=account_type,
        subtype=subtype,
        description=description,
        is_system=is_system,
    )


# Minimal retail chart. Discretionary categories (other income,
# operating expenses) are not system accounts and may be retired.
DEFAULT_CHART_OF_ACCOUNTS: list[AccountCreate] = [
    # Assets
    _account("1000", "Cash", AccountType.ASSET, "current_asset",
             "Cash on hand and in bank"),
    _account("1100", "Accounts Receivable", AccountType.ASSET, "current_asset",
             "Money owed by customers"),
    _account("1200", "Inventory", AccountType.ASSET, "current_asset",
             "Products available for sale"),
    _account("1500", "Equipment", AccountType.ASSET, "fixed_asset",
             "Store equipment and fixtures"),
    # Liabilities
    _account("2000", "Accounts Payable", AccountType.LIABILITY, "current_liability",
             "Money owed to suppliers"),
    _account("2100", "Sales Tax Payable", AccountType.LIABILITY, "current_liability",
             "VAT/Tax collected from sales"),
    # Equity
    _account("3000", "Owner's Capital", AccountType.EQUITY, None,
             "Owner's investment in business"),
    _account("3100", "Retained Earnings", AccountType.EQUITY, None,
             "Accumulated profits"),
    # Revenue
    _account("4000", "Sales Revenue", AccountType.REVENUE, None,
             "Revenue from product sales"),
    _account("4100", "Other Income", AccountType.REVENUE, None,
             "Miscellaneous income", is_system=False),
    # Expenses
    _account("5000", "Cost of Goods Sold", AccountType.EXPENSE, "cogs",
             "Direct cost of products sold"),
    _account("6000", "Rent Expense", AccountType.EXPENSE, "operating_expense",
             "Store rent", is_system=False),
    _account("6100", "Utilities Expense", AccountType.EXPENSE, "operating_expense",
             "Electricity, water, internet", is_system=False),
    _account("6200", "Salaries Expense", AccountType.EXPENSE, "operating_expense",
             "Employee wages", is_system=False),
    _account("6300", "Marketing Expense", AccountType.EXPENSE, "operating_expense",
             "Advertising and promotions", is_system=False),
    _account("6400", "Supplies Expense", AccountType.EXPENSE, "operating_expense",
             "Office and store supplies", is_system=False),
    _account("6500", "Depreciation Expense", AccountType.EXPENSE, "operating_expense",
             "Asset depreciation", is_system=False),
]


class ChartOfAccountsService:

    def __init__(self, db: Session):
        self.db = db

    def create_account(self, request: AccountCreate) -> LedgerAccount:
        """
        Create a new ledger account.

        Raises ValidationError if the code already exists or the
        parent account is unknown. The normal balance defaults
        from the account type and cannot be changed later.
        """
        if self.get_account_by_code(request.code):
            raise ValidationError(
                f"Account with code '{request.code}' already exists"
            )

        if request.parent_account_id is not None:
            self._require_parent(request.parent_account_id)

        account = LedgerAccount(
            code=request.code,
            name=request.name,
            account_type=request.account_type,
            subtype=request.subtype,
            normal_balance=(
                request.normal_balance
                or DEFAULT_NORMAL_BALANCE[request.account_type]
            ),
            description=request.description,
            is_active=request.is_active,
            is_system=request.is_system,
            parent_account_id=request.parent_account_id,
        )
        self.db.add(account)
        self.db.flush()
        logger.info("Created account %s %s", account.code, account.name)
        return account

    def get_account(self, account_id: int) -> LedgerAccount | None:
        return self.db.get(LedgerAccount, account_id)

    def get_account_by_code(self, code: str) -> LedgerAccount | None:
        return self.db.execute(
            select(LedgerAccount).where(LedgerAccount.code == code)
        ).scalar_one_or_none()

    def list_accounts(
        self,
        account_type: AccountType | None = None,
        active_only: bool = False,
    ) -> list[LedgerAccount]:
        """Accounts in creation order, optionally filtered."""
        query = select(LedgerAccount)
        if account_type is not None:
            query = query.where(LedgerAccount.account_type == account_type)
        if active_only:
            query = query.where(LedgerAccount.is_active.is_(True))

        accounts = self.db.execute(
            query.order_by(LedgerAccount.id)
        ).scalars().all()
        return list(accounts)

    def update_account(
        self, account_id: int, request: AccountUpdate
    ) -> LedgerAccount:
        account = self.get_account(account_id)
        if not account:
            raise NotFoundError(f"Account {account_id} not found")

        changes = request.model_dump(exclude_unset=True)

        for field in ("code", "name", "is_active"):
            if field in changes and changes[field] is None:
                raise ValidationError(f"{field} cannot be null")

        new_code = changes.get("code")
        if new_code is not None and new_code != account.code:
            if account.is_system:
                raise ValidationError(
                    f"System account {account.code} cannot change its code"
                )
            if self.get_account_by_code(new_code):
                raise ValidationError(
                    f"Account with code '{new_code}' already exists"
                )

        parent_id = changes.get("parent_account_id")
        if parent_id is not None:
            if parent_id == account.id:
                raise ValidationError("An account cannot be its own parent")
            self._check_no_cycle(account, self._require_parent(parent_id))

        if changes.get("is_active") is False and account.is_system:
            raise ValidationError(
                f"System account {account.code} cannot be deactivated"
            )

        for field, value in changes.items():
            setattr(account, field, value)

        self.db.flush()
        return account

    def deactivate_account(self, account_id: int) -> LedgerAccount:
        """Retire an account. Its history stays in the ledger."""
        account = self.update_account(account_id, AccountUpdate(is_active=False))
        logger.info("Deactivated account %s", account.code)
        return account

    def seed_default_chart_of_accounts(self) -> int:
        """
        Insert the default chart of accounts.

        Idempotent: when any account already exists, nothing is
        inserted. Returns the number of accounts created.
        """
        existing = self.db.execute(
            select(LedgerAccount.id).limit(1)
        ).scalar_one_or_none()
        if existing is not None:
            return 0

        for request in DEFAULT_CHART_OF_ACCOUNTS:
            self.create_account(request)

        logger.info(
            "Chart of accounts initialized with %d accounts",
            len(DEFAULT_CHART_OF_ACCOUNTS),
        )
        return len(DEFAULT_CHART_OF_ACCOUNTS)

    def _require_parent(self, parent_id: int) -> LedgerAccount:
        parent = self.get_account(parent_id)
        if not parent:
            raise ValidationError(f"Parent account {parent_id} not found")
        return parent

    def _check_no_cycle(
        self, account: LedgerAccount, parent: LedgerAccount
    ) -> None:
        """Reject a parent that already sits below the account."""
        seen = set()
        ancestor = parent
        while ancestor is not None and ancestor.id not in seen:
            if ancestor.id == account.id:
                raise ValidationError(
                    f"Account {parent.code} is below {account.code} in the "
                    f"chart and cannot become its parent"
                )
            seen.add(ancestor.id)
            ancestor = ancestor.parent
