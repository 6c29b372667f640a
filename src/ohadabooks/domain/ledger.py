"""Ledger aggregation over any ledger line source."""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from ohadabooks.database.base import LedgerLineSource
from ohadabooks.domain.entities import JournalEntry, LedgerLine


class InMemoryLedgerSource(LedgerLineSource):
    """Ledger line source over journal entries held in memory."""

    def __init__(self, entries: Iterable[JournalEntry]):
        self.entries = list(entries)

    def ledger_lines(
        self,
        owner_id: str,
        account_code_prefix: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[LedgerLine]:
        lines = []
        for entry in self.entries:
            if entry.owner_id != owner_id:
                continue
            if start_date is not None and entry.date < start_date:
                continue
            if end_date is not None and entry.date > end_date:
                continue
            for line in entry.lines:
                if line.account_code.startswith(account_code_prefix):
                    lines.append(
                        LedgerLine(
                            entry_id=entry.id,
                            entry_date=entry.date,
                            account_code=line.account_code,
                            debit=line.debit,
                            credit=line.credit,
                        )
                    )
        return lines


class LedgerAggregator:
    """Computes natural (debit-positive) balances by account-code prefix.

    A prefix aggregates every account below it: the balance of "2" covers
    "21", "211", "22" and so on. Nothing is cached.
    """

    def __init__(self, source: LedgerLineSource):
        """Initialize ledger aggregator.

        Args:
            source: Ledger line source (a Database or an in-memory source)
        """
        self.source = source

    def account_balance(
        self,
        account_code_prefix: str,
        owner_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Decimal:
        """Return sum(debit - credit) of matching lines in the inclusive date range."""
        lines = self.source.ledger_lines(owner_id, account_code_prefix, start_date, end_date)
        return sum((line.amount for line in lines), Decimal("0"))

    def balances_by_account(
        self,
        account_code_prefix: str,
        owner_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> dict[str, Decimal]:
        """Return the natural balance of every posted account code under the prefix."""
        balances: dict[str, Decimal] = defaultdict(lambda: Decimal("0"))
        for line in self.source.ledger_lines(owner_id, account_code_prefix, start_date, end_date):
            balances[line.account_code] += line.amount
        return dict(sorted(balances.items()))
