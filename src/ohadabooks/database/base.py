"""Abstract storage interfaces."""

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional

# Import entities directly to avoid circular import through domain/__init__.py
from ohadabooks.domain.entities import (
    Account,
    AccountCategory,
    JournalEntry,
    JournalType,
    LedgerLine,
    NormalBalance,
)


class LedgerLineSource(ABC):
    """Source of ledger lines consumed by the ledger aggregator."""

    @abstractmethod
    def ledger_lines(
        self,
        owner_id: str,
        account_code_prefix: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[LedgerLine]:
        """Return the owner's lines whose account code starts with the prefix.

        Args:
            owner_id: Owner scoping key
            account_code_prefix: Account code prefix ("" matches every line)
            start_date: Optional inclusive lower bound on the entry date
            end_date: Optional inclusive upper bound on the entry date
        """
        pass


class Database(LedgerLineSource):
    """Abstract database interface for ohadabooks."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Account operations
    @abstractmethod
    def upsert_account(
        self,
        owner_id: str,
        code: str,
        label: str,
        category: Optional[AccountCategory] = None,
        normal_balance: Optional[NormalBalance] = None,
        description: Optional[str] = None,
    ) -> Account:
        """Create the account, or update it if (code, owner) already exists."""
        pass

    @abstractmethod
    def get_account(self, owner_id: str, code: str) -> Optional[Account]:
        """Get account by code."""
        pass

    @abstractmethod
    def list_accounts(self, owner_id: str) -> list[Account]:
        """List all accounts of an owner, ordered by code."""
        pass

    # Journal entry operations
    @abstractmethod
    def create_journal_entry(self, entry: JournalEntry) -> None:
        """Persist an entry together with all its lines, or nothing at all."""
        pass

    @abstractmethod
    def get_journal_entry(self, entry_id: str) -> Optional[JournalEntry]:
        """Get journal entry by ID, regardless of owner."""
        pass

    @abstractmethod
    def list_journal_entries(
        self,
        owner_id: str,
        journal_type: Optional[JournalType] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[JournalEntry]:
        """List journal entries with optional filters, newest first."""
        pass
