"""Mapper functions to convert between domain models and SQLAlchemy models.

Enum-valued fields are stored as their string values and converted back here,
so the rest of the code only ever sees domain enums.
"""

from decimal import Decimal

from ohadabooks.domain import entities as domain
from ohadabooks.database.models import (
    Account as ORMAccount,
    JournalEntry as ORMJournalEntry,
    JournalLine as ORMJournalLine,
)


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        code=orm_account.code,
        label=orm_account.label,
        owner_id=orm_account.owner_id,
        category=domain.AccountCategory(orm_account.category) if orm_account.category else None,
        normal_balance=(
            domain.NormalBalance(orm_account.normal_balance) if orm_account.normal_balance else None
        ),
        description=orm_account.description,
    )


def journal_line_to_domain(orm_line: ORMJournalLine) -> domain.JournalLine:
    """Convert SQLAlchemy JournalLine model to domain JournalLine entity."""
    return domain.JournalLine(
        id=orm_line.id,
        account_code=orm_line.account_code,
        label=orm_line.label,
        debit=Decimal(orm_line.debit),
        credit=Decimal(orm_line.credit),
    )


def journal_entry_to_domain(orm_entry: ORMJournalEntry) -> domain.JournalEntry:
    """Convert SQLAlchemy JournalEntry model (with lines) to domain JournalEntry entity."""
    return domain.JournalEntry(
        id=orm_entry.id,
        owner_id=orm_entry.owner_id,
        date=orm_entry.date,
        reference=orm_entry.reference,
        description=orm_entry.description,
        journal_type=domain.JournalType(orm_entry.journal_type),
        lines=tuple(journal_line_to_domain(line) for line in orm_entry.lines),
    )


def journal_entry_to_orm(entry: domain.JournalEntry) -> ORMJournalEntry:
    """Convert a domain JournalEntry into a new SQLAlchemy model with its lines."""
    return ORMJournalEntry(
        id=entry.id,
        owner_id=entry.owner_id,
        date=entry.date,
        reference=entry.reference,
        description=entry.description,
        journal_type=entry.journal_type.value,
        lines=[
            ORMJournalLine(
                id=line.id,
                position=position,
                account_code=line.account_code,
                label=line.label,
                debit=line.debit,
                credit=line.credit,
            )
            for position, line in enumerate(entry.lines)
        ],
    )
