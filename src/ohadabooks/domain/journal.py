"""Journal entry validation and journal domain service."""

import logging
import uuid
from dataclasses import replace
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Callable, Mapping, Optional, Sequence, Union

from ohadabooks.database.base import Database
from ohadabooks.domain.entities import JournalEntry, JournalLine, JournalType
from ohadabooks.domain.errors import (
    BalanceError,
    NotFoundError,
    OwnershipError,
    ValidationError,
    account_not_found,
    entry_not_found,
    entry_not_owned,
    invalid_choice,
)
from ohadabooks.utils.amount_parser import parse_amount
from ohadabooks.utils.date_parser import parse_date

logger = logging.getLogger(__name__)

# Absolute tolerance between total debit and total credit.
BALANCE_EPSILON = Decimal("0.01")

# Amounts are stored with two decimal places.
AMOUNT_PRECISION = Decimal("0.01")

LineInput = Union[JournalLine, Mapping[str, Any]]
NotificationSink = Callable[[str, Any], None]


def _totals(lines: Sequence[JournalLine]) -> tuple[Decimal, Decimal]:
    total_debit = sum((line.debit for line in lines), Decimal("0"))
    total_credit = sum((line.credit for line in lines), Decimal("0"))
    return total_debit, total_credit


def is_balanced(lines: Sequence[JournalLine]) -> bool:
    """Return True if debits and credits agree within BALANCE_EPSILON."""
    total_debit, total_credit = _totals(lines)
    return abs(total_debit - total_credit) <= BALANCE_EPSILON


def check_balance(lines: Sequence[JournalLine]) -> tuple[Decimal, Decimal]:
    """Return (total_debit, total_credit), raising BalanceError if unbalanced."""
    total_debit, total_credit = _totals(lines)
    if abs(total_debit - total_credit) > BALANCE_EPSILON:
        raise BalanceError(total_debit, total_credit)
    return total_debit, total_credit


def to_cents(value: Any) -> Decimal:
    """Parse an amount and round it half-up to the stored precision."""
    return parse_amount(value).quantize(AMOUNT_PRECISION, rounding=ROUND_HALF_UP)


def parse_line(raw: Mapping[str, Any], default_label: str = "") -> JournalLine:
    """Build a journal line from raw values.

    Accepts ``account_code`` (or ``accountCode``), ``label``, ``debit`` and
    ``credit``. An absent amount counts as zero; a present but unparseable
    one raises ParseError. Amounts are rounded half-up to cents, the
    precision the store keeps, before any balance check sees them.

    Raises:
        ParseError: If debit or credit is not numeric
        ValidationError: If the account code is missing or an amount is negative
    """
    account_code = str(raw.get("account_code", raw.get("accountCode")) or "").strip()
    if not account_code:
        raise ValidationError("Journal line is missing an account code")

    label = str(raw.get("label") or "").strip() or default_label
    debit = to_cents(raw["debit"]) if "debit" in raw else Decimal("0.00")
    credit = to_cents(raw["credit"]) if "credit" in raw else Decimal("0.00")

    return JournalLine(id="", account_code=account_code, label=label, debit=debit, credit=credit)


def _require(value: Optional[str], field: str) -> str:
    value = (value or "").strip()
    if not value:
        raise ValidationError(f"Missing required field '{field}'")
    return value


def _journal_type(value: Union[JournalType, str]) -> JournalType:
    if isinstance(value, JournalType):
        return value
    try:
        return JournalType(value)
    except ValueError:
        raise ValidationError(
            invalid_choice("journal type", value, [j.value for j in JournalType])
        )


def build_entry(
    owner_id: str,
    entry_date: Union[date, str],
    reference: str,
    description: str,
    journal_type: Union[JournalType, str],
    lines: Sequence[LineInput],
) -> JournalEntry:
    """Validate an entry and give it and its lines fresh identifiers.

    Line objects go through the same amount parsing and rounding as raw
    lines. Nothing is persisted here; a failure leaves no trace.

    Raises:
        ParseError: If the date or an amount cannot be parsed
        ValidationError: If a required field is missing or a line is invalid
        BalanceError: If debits and credits differ by more than BALANCE_EPSILON
    """
    owner_id = _require(owner_id, "owner_id")
    reference = _require(reference, "reference")
    description = _require(description, "description")
    parsed_date = parse_date(entry_date)
    parsed_type = _journal_type(journal_type)

    if not lines:
        raise ValidationError("Journal entry must have at least one line")

    parsed_lines = [
        replace(line, debit=to_cents(line.debit), credit=to_cents(line.credit))
        if isinstance(line, JournalLine)
        else parse_line(line, default_label=description)
        for line in lines
    ]
    for position, line in enumerate(parsed_lines, start=1):
        if not line.account_code:
            raise ValidationError(f"Line {position}: missing account code")
        if line.debit < 0 or line.credit < 0:
            raise ValidationError(
                f"Line {position}: debit and credit must not be negative "
                f"(debit {line.debit}, credit {line.credit})"
            )

    check_balance(parsed_lines)

    return JournalEntry(
        id=str(uuid.uuid4()),
        owner_id=owner_id,
        date=parsed_date,
        reference=reference,
        description=description,
        journal_type=parsed_type,
        lines=tuple(replace(line, id=str(uuid.uuid4())) for line in parsed_lines),
    )


class JournalService:
    """Service for recording and reading journal entries."""

    def __init__(self, db: Database, notify: Optional[NotificationSink] = None):
        """Initialize journal service.

        Args:
            db: Database instance
            notify: Optional sink called as notify(event_name, entry) after a
                successful write
        """
        self.db = db
        self.notify = notify

    def create_entry(
        self,
        owner_id: str,
        entry_date: Union[date, str],
        reference: str,
        description: str,
        journal_type: Union[JournalType, str],
        lines: Sequence[LineInput],
        require_known_accounts: bool = False,
    ) -> JournalEntry:
        """Validate and persist a journal entry with all its lines.

        Args:
            owner_id: Owner scoping key
            entry_date: Entry date
            reference: Entry reference (e.g., invoice number)
            description: Entry description, also the default line label
            journal_type: purchases, sales, bank or cash
            lines: Journal lines or raw line mappings
            require_known_accounts: If True, every line's account code must
                exist in the owner's chart

        Returns:
            The persisted entry

        Raises:
            ValidationError: If the entry is malformed
            BalanceError: If the entry does not balance
            NotFoundError: If require_known_accounts is set and a code is unknown
        """
        entry = build_entry(owner_id, entry_date, reference, description, journal_type, lines)

        if require_known_accounts:
            known = {account.code for account in self.db.list_accounts(entry.owner_id)}
            for line in entry.lines:
                if line.account_code not in known:
                    raise NotFoundError(account_not_found(line.account_code))

        self.db.create_journal_entry(entry)
        logger.debug(
            "Recorded entry %s (%s, %d lines, %s)",
            entry.id,
            entry.reference,
            len(entry.lines),
            entry.total_debit,
        )
        self._notify("journal_entry_created", entry)
        return entry

    def _notify(self, event: str, payload: Any) -> None:
        if self.notify is None:
            return
        try:
            self.notify(event, payload)
        except Exception:
            logger.warning("Notification sink failed for %s", event, exc_info=True)

    def get_entry(self, entry_id: str, owner_id: str) -> JournalEntry:
        """Get an owner's journal entry.

        Raises:
            NotFoundError: If the entry does not exist
            OwnershipError: If the entry belongs to another owner
        """
        entry = self.db.get_journal_entry(entry_id)
        if entry is None:
            raise NotFoundError(entry_not_found(entry_id))
        if entry.owner_id != owner_id:
            raise OwnershipError(entry_not_owned(entry_id, owner_id))
        return entry

    def list_entries(
        self,
        owner_id: str,
        journal_type: Union[JournalType, str, None] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[JournalEntry]:
        """List an owner's entries, newest first, optionally filtered."""
        if journal_type is not None:
            journal_type = _journal_type(journal_type)
        return self.db.list_journal_entries(
            owner_id=owner_id,
            journal_type=journal_type,
            start_date=start_date,
            end_date=end_date,
        )
