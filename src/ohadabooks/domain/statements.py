"""Financial statement domain service."""

import logging
from datetime import date
from decimal import Decimal
from enum import Enum, IntEnum
from typing import Mapping, Optional

from ohadabooks.database.base import Database
from ohadabooks.domain.entities import (
    Account,
    AccountLevel,
    BalanceSheet,
    IncomeStatement,
    StatementLine,
)
from ohadabooks.domain.ledger import LedgerAggregator

logger = logging.getLogger(__name__)


class AccountClass(IntEnum):
    """OHADA account classes, identified by the leading digit of a code."""

    EQUITY_AND_LONG_TERM_DEBT = 1
    FIXED_ASSETS = 2
    INVENTORIES = 3
    THIRD_PARTIES = 4
    TREASURY = 5
    EXPENSES = 6
    REVENUES = 7

    @classmethod
    def from_code(cls, code: str) -> Optional["AccountClass"]:
        """Return the class of a code, or None for a leading digit outside 1-7."""
        if not code or not code[0].isdigit():
            return None
        try:
            return cls(int(code[0]))
        except ValueError:
            return None


class StatementBucket(str, Enum):
    """Section of a financial statement."""

    ASSETS = "assets"
    LIABILITIES = "liabilities"
    EQUITY = "equity"
    REVENUES = "revenues"
    EXPENSES = "expenses"


BALANCE_SHEET_BUCKETS = (StatementBucket.ASSETS, StatementBucket.LIABILITIES, StatementBucket.EQUITY)
INCOME_STATEMENT_BUCKETS = (StatementBucket.REVENUES, StatementBucket.EXPENSES)

# Class 4 and class 5 both reported as liabilities.
DEFAULT_CLASS_BUCKETS: Mapping[AccountClass, StatementBucket] = {
    AccountClass.EQUITY_AND_LONG_TERM_DEBT: StatementBucket.EQUITY,
    AccountClass.FIXED_ASSETS: StatementBucket.ASSETS,
    AccountClass.INVENTORIES: StatementBucket.ASSETS,
    AccountClass.THIRD_PARTIES: StatementBucket.LIABILITIES,
    AccountClass.TREASURY: StatementBucket.LIABILITIES,
    AccountClass.EXPENSES: StatementBucket.EXPENSES,
    AccountClass.REVENUES: StatementBucket.REVENUES,
}

# Class 4 reported as assets instead.
ALTERNATE_CLASS_BUCKETS: Mapping[AccountClass, StatementBucket] = {
    **DEFAULT_CLASS_BUCKETS,
    AccountClass.THIRD_PARTIES: StatementBucket.ASSETS,
}


def _total(lines: list[StatementLine]) -> Decimal:
    return sum((line.balance for line in lines), Decimal("0"))


class StatementService:
    """Builds balance sheets and income statements from the ledger.

    Only account-level entries (two-digit codes) of the owner's chart are
    listed. Each is aggregated by its own code as prefix, so postings on its
    subaccounts are included.
    """

    def __init__(
        self,
        db: Database,
        class_buckets: Mapping[AccountClass, StatementBucket] = DEFAULT_CLASS_BUCKETS,
    ):
        """Initialize statement service.

        Args:
            db: Database instance (account store and ledger line source)
            class_buckets: Mapping from account class to statement bucket
        """
        self.db = db
        self.class_buckets = class_buckets
        self.aggregator = LedgerAggregator(db)

    def bucket_for(self, account: Account) -> Optional[StatementBucket]:
        """Return the statement bucket of an account, or None if unreported."""
        account_class = AccountClass.from_code(account.code)
        if account_class is None:
            return None
        return self.class_buckets.get(account_class)

    def _collect(
        self,
        owner_id: str,
        buckets: tuple[StatementBucket, ...],
        start_date: Optional[date],
        end_date: Optional[date],
    ) -> dict[StatementBucket, list[StatementLine]]:
        collected: dict[StatementBucket, list[StatementLine]] = {bucket: [] for bucket in buckets}
        for account in self.db.list_accounts(owner_id):
            if account.level != AccountLevel.ACCOUNT:
                continue
            bucket = self.bucket_for(account)
            if bucket not in collected:
                continue
            balance = self.aggregator.account_balance(account.code, owner_id, start_date, end_date)
            collected[bucket].append(StatementLine(code=account.code, label=account.label, balance=balance))
        return collected

    def balance_sheet(
        self,
        owner_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> BalanceSheet:
        """Build the balance sheet for the inclusive date range.

        Args:
            owner_id: Owner scoping key
            start_date: Optional start date
            end_date: Optional end date

        Returns:
            BalanceSheet with assets, liabilities, equity and their totals
        """
        collected = self._collect(owner_id, BALANCE_SHEET_BUCKETS, start_date, end_date)
        assets = collected[StatementBucket.ASSETS]
        liabilities = collected[StatementBucket.LIABILITIES]
        equity = collected[StatementBucket.EQUITY]
        logger.debug(
            "Balance sheet for %s: %d asset, %d liability, %d equity lines",
            owner_id,
            len(assets),
            len(liabilities),
            len(equity),
        )
        return BalanceSheet(
            start_date=start_date,
            end_date=end_date,
            assets=tuple(assets),
            liabilities=tuple(liabilities),
            equity=tuple(equity),
            total_assets=_total(assets),
            total_liabilities=_total(liabilities),
            total_equity=_total(equity),
        )

    def income_statement(
        self,
        owner_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> IncomeStatement:
        """Build the income statement for the inclusive date range.

        Balances keep their natural sign, so net income is
        total_revenues - total_expenses on natural balances.
        """
        collected = self._collect(owner_id, INCOME_STATEMENT_BUCKETS, start_date, end_date)
        revenues = collected[StatementBucket.REVENUES]
        expenses = collected[StatementBucket.EXPENSES]
        total_revenues = _total(revenues)
        total_expenses = _total(expenses)
        return IncomeStatement(
            start_date=start_date,
            end_date=end_date,
            revenues=tuple(revenues),
            expenses=tuple(expenses),
            total_revenues=total_revenues,
            total_expenses=total_expenses,
            net_income=total_revenues - total_expenses,
        )
