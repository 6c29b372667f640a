"""Bank reconciliation matching.

Every operation returns a new ReconciliationResult; transactions handed in
are never modified.
"""

import logging
import uuid
from dataclasses import replace
from decimal import Decimal
from typing import Any, Iterable, Mapping, Sequence, Union

from ohadabooks.domain.entities import (
    BankTransaction,
    JournalEntry,
    ReconciliationMatch,
    ReconciliationResult,
    TransactionStatus,
    TransactionType,
)
from ohadabooks.domain.errors import NotFoundError, ValidationError, invalid_choice, transaction_not_found
from ohadabooks.utils.amount_parser import parse_amount
from ohadabooks.utils.date_parser import parse_date

logger = logging.getLogger(__name__)

AMOUNT_TOLERANCE = Decimal("0.01")
AMOUNT_SCORE = 50
DATE_SCORE = 30
DESCRIPTION_SCORE = 20
MAX_CONFIDENCE = 100
MANUAL_CONFIDENCE = 100


def _transaction_type(value: Union[TransactionType, str, None], amount: Decimal) -> TransactionType:
    if value is None or value == "":
        return TransactionType.DEBIT if amount < 0 else TransactionType.CREDIT
    if isinstance(value, TransactionType):
        return value
    try:
        return TransactionType(str(value).strip().lower())
    except ValueError:
        raise ValidationError(invalid_choice("transaction type", value, [t.value for t in TransactionType]))


def import_transactions(rows: Iterable[Mapping[str, Any]]) -> list[BankTransaction]:
    """Turn raw statement rows into pending bank transactions with fresh IDs.

    Each row needs ``date``, ``description`` and ``amount``; ``type`` is
    derived from the amount sign when absent, ``reference`` is optional.

    Raises:
        ParseError: If a date or amount cannot be parsed
        ValidationError: If the type is not credit or debit
    """
    transactions = []
    for row in rows:
        amount = parse_amount(row.get("amount"))
        transactions.append(
            BankTransaction(
                id=str(uuid.uuid4()),
                date=parse_date(row.get("date") or ""),
                description=str(row.get("description") or "").strip(),
                amount=amount,
                type=_transaction_type(row.get("type"), amount),
                status=TransactionStatus.PENDING,
                reference=row.get("reference") or None,
            )
        )
    return transactions


def entry_amount(entry: JournalEntry, transaction_type: TransactionType) -> Decimal:
    """Sum the entry's credits for a credit transaction, its debits otherwise."""
    if transaction_type == TransactionType.CREDIT:
        return sum((line.credit for line in entry.lines), Decimal("0"))
    return sum((line.debit for line in entry.lines), Decimal("0"))


def _amount_matches(transaction: BankTransaction, entry: JournalEntry) -> bool:
    return abs(entry_amount(entry, transaction.type) - abs(transaction.amount)) < AMOUNT_TOLERANCE


def is_candidate(transaction: BankTransaction, entry: JournalEntry) -> bool:
    """An entry is a candidate when amount and date both match exactly."""
    return _amount_matches(transaction, entry) and entry.date == transaction.date


def calculate_confidence(transaction: BankTransaction, entry: JournalEntry) -> float:
    """Score a transaction against an entry, from 0 to 100.

    50 points for a matching amount, 30 for the same date, and up to 20 for
    the share of description words in common, relative to the longer
    description.
    """
    confidence = 0.0
    if _amount_matches(transaction, entry):
        confidence += AMOUNT_SCORE
    if entry.date == transaction.date:
        confidence += DATE_SCORE

    transaction_words = transaction.description.lower().split()
    entry_words = entry.description.lower().split()
    longest = max(len(transaction_words), len(entry_words))
    if longest:
        common = [word for word in transaction_words if word in entry_words]
        confidence += len(common) / longest * DESCRIPTION_SCORE

    return min(confidence, MAX_CONFIDENCE)


def find_matches(
    transactions: Sequence[BankTransaction], entries: Sequence[JournalEntry]
) -> ReconciliationResult:
    """Match pending transactions to journal entries.

    A pending transaction with exactly one candidate entry becomes matched
    and gets a match record; with zero or several candidates it becomes
    unmatched. Transactions that are not pending are passed through as is.
    """
    updated: list[BankTransaction] = []
    matches: list[ReconciliationMatch] = []

    for transaction in transactions:
        if transaction.status != TransactionStatus.PENDING:
            updated.append(transaction)
            continue

        candidates = [entry for entry in entries if is_candidate(transaction, entry)]
        if len(candidates) == 1:
            entry = candidates[0]
            matches.append(
                ReconciliationMatch(
                    bank_transaction_id=transaction.id,
                    journal_entry_id=entry.id,
                    confidence=calculate_confidence(transaction, entry),
                )
            )
            updated.append(
                replace(transaction, status=TransactionStatus.MATCHED, matched_entry_id=entry.id)
            )
        else:
            if candidates:
                logger.debug(
                    "Transaction %s left unmatched: %d candidate entries",
                    transaction.id,
                    len(candidates),
                )
            updated.append(replace(transaction, status=TransactionStatus.UNMATCHED))

    logger.info("Reconciled %d transactions: %d matched", len(updated), len(matches))
    return ReconciliationResult(transactions=tuple(updated), matches=tuple(matches))


def _index_of(result: ReconciliationResult, transaction_id: str) -> int:
    for index, transaction in enumerate(result.transactions):
        if transaction.id == transaction_id:
            return index
    raise NotFoundError(transaction_not_found(transaction_id))


def confirm_match(result: ReconciliationResult, transaction_id: str, entry_id: str) -> ReconciliationResult:
    """Manually match a transaction to an entry, replacing any earlier match.

    Raises:
        NotFoundError: If the transaction is not part of the result
    """
    index = _index_of(result, transaction_id)
    transactions = list(result.transactions)
    transactions[index] = replace(
        transactions[index], status=TransactionStatus.MATCHED, matched_entry_id=entry_id
    )
    matches = [m for m in result.matches if m.bank_transaction_id != transaction_id]
    matches.append(
        ReconciliationMatch(
            bank_transaction_id=transaction_id,
            journal_entry_id=entry_id,
            confidence=MANUAL_CONFIDENCE,
        )
    )
    return ReconciliationResult(transactions=tuple(transactions), matches=tuple(matches))


def unmatch(result: ReconciliationResult, transaction_id: str) -> ReconciliationResult:
    """Mark a transaction unmatched and drop its match record.

    Raises:
        NotFoundError: If the transaction is not part of the result
    """
    index = _index_of(result, transaction_id)
    transactions = list(result.transactions)
    transactions[index] = replace(
        transactions[index], status=TransactionStatus.UNMATCHED, matched_entry_id=None
    )
    matches = tuple(m for m in result.matches if m.bank_transaction_id != transaction_id)
    return ReconciliationResult(transactions=tuple(transactions), matches=matches)
