"""Domain model entities for ohadabooks.

These are pure data classes representing bookkeeping concepts, independent of
database schema. Services and reports exchange these, never ORM rows.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional


class AccountCategory(str, Enum):
    """Accounting category of a chart entry."""

    ASSET = "asset"
    LIABILITY = "liability"
    EQUITY = "equity"
    REVENUE = "revenue"
    EXPENSE = "expense"


class NormalBalance(str, Enum):
    """Side on which an account normally carries its balance."""

    DEBIT = "debit"
    CREDIT = "credit"


class AccountLevel(str, Enum):
    """Position of a code in the chart, derived from its length."""

    CLASS = "class"
    ACCOUNT = "account"
    SUBACCOUNT = "subaccount"

    @classmethod
    def from_code(cls, code: str) -> "AccountLevel":
        if len(code) == 1:
            return cls.CLASS
        if len(code) == 2:
            return cls.ACCOUNT
        return cls.SUBACCOUNT


class JournalType(str, Enum):
    """Journal in which an entry is recorded."""

    PURCHASES = "purchases"
    SALES = "sales"
    BANK = "bank"
    CASH = "cash"


class TransactionType(str, Enum):
    """Direction of a bank transaction."""

    CREDIT = "credit"
    DEBIT = "debit"


class TransactionStatus(str, Enum):
    """Reconciliation status of a bank transaction."""

    PENDING = "pending"
    MATCHED = "matched"
    UNMATCHED = "unmatched"


@dataclass(frozen=True)
class Account:
    """Chart-of-accounts entry for one owner."""

    code: str
    label: str
    owner_id: str
    category: Optional[AccountCategory] = None
    normal_balance: Optional[NormalBalance] = None
    description: Optional[str] = None

    @property
    def level(self) -> AccountLevel:
        return AccountLevel.from_code(self.code)

    @property
    def class_code(self) -> str:
        return self.code[0]


@dataclass(frozen=True)
class AccountNode:
    """An account placed in the chart tree, with its children ordered by code."""

    account: Account
    children: tuple["AccountNode", ...] = ()

    @property
    def code(self) -> str:
        return self.account.code

    @property
    def label(self) -> str:
        return self.account.label

    @property
    def level(self) -> AccountLevel:
        return self.account.level


@dataclass(frozen=True)
class JournalLine:
    """One debit or credit line of a journal entry."""

    id: str
    account_code: str
    label: str
    debit: Decimal = Decimal("0")
    credit: Decimal = Decimal("0")


@dataclass(frozen=True)
class JournalEntry:
    """A balanced set of lines recorded together under one reference and date."""

    id: str
    owner_id: str
    date: date
    reference: str
    description: str
    journal_type: JournalType
    lines: tuple[JournalLine, ...]

    @property
    def total_debit(self) -> Decimal:
        return sum((line.debit for line in self.lines), Decimal("0"))

    @property
    def total_credit(self) -> Decimal:
        return sum((line.credit for line in self.lines), Decimal("0"))


@dataclass(frozen=True)
class LedgerLine:
    """A journal line joined with the date of its entry."""

    entry_id: str
    entry_date: date
    account_code: str
    debit: Decimal
    credit: Decimal

    @property
    def amount(self) -> Decimal:
        """Natural, debit-positive amount."""
        return self.debit - self.credit


@dataclass(frozen=True)
class BankTransaction:
    """A transaction reported on a bank statement."""

    id: str
    date: date
    description: str
    amount: Decimal
    type: TransactionType
    status: TransactionStatus = TransactionStatus.PENDING
    matched_entry_id: Optional[str] = None
    reference: Optional[str] = None


@dataclass(frozen=True)
class ReconciliationMatch:
    """Assignment of a bank transaction to a journal entry."""

    bank_transaction_id: str
    journal_entry_id: str
    confidence: float


@dataclass(frozen=True)
class ReconciliationResult:
    """Transactions with their updated statuses plus the recorded matches."""

    transactions: tuple[BankTransaction, ...]
    matches: tuple[ReconciliationMatch, ...]

    def _with_status(self, status: TransactionStatus) -> list[BankTransaction]:
        return [txn for txn in self.transactions if txn.status == status]

    @property
    def pending(self) -> list[BankTransaction]:
        return self._with_status(TransactionStatus.PENDING)

    @property
    def matched(self) -> list[BankTransaction]:
        return self._with_status(TransactionStatus.MATCHED)

    @property
    def unmatched(self) -> list[BankTransaction]:
        return self._with_status(TransactionStatus.UNMATCHED)

    @property
    def total_unmatched(self) -> Decimal:
        return sum((txn.amount for txn in self.unmatched), Decimal("0"))

    def match_for(self, transaction_id: str) -> Optional[ReconciliationMatch]:
        for match in self.matches:
            if match.bank_transaction_id == transaction_id:
                return match
        return None


@dataclass(frozen=True)
class StatementLine:
    """One account line of a financial statement."""

    code: str
    label: str
    balance: Decimal


@dataclass(frozen=True)
class BalanceSheet:
    """Balance sheet over a date range."""

    start_date: Optional[date]
    end_date: Optional[date]
    assets: tuple[StatementLine, ...] = ()
    liabilities: tuple[StatementLine, ...] = ()
    equity: tuple[StatementLine, ...] = ()
    total_assets: Decimal = Decimal("0")
    total_liabilities: Decimal = Decimal("0")
    total_equity: Decimal = Decimal("0")


@dataclass(frozen=True)
class IncomeStatement:
    """Income statement over a date range."""

    start_date: Optional[date]
    end_date: Optional[date]
    revenues: tuple[StatementLine, ...] = ()
    expenses: tuple[StatementLine, ...] = ()
    total_revenues: Decimal = Decimal("0")
    total_expenses: Decimal = Decimal("0")
    net_income: Decimal = Decimal("0")
