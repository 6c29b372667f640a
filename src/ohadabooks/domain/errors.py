"""Shared domain error messages and error types."""

from decimal import Decimal


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for callers that only catch ValueError.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class ParseError(ValidationError):
    """A raw amount or date could not be parsed."""


class BalanceError(ValidationError):
    """Journal lines whose debits and credits do not balance."""

    def __init__(self, total_debit: Decimal, total_credit: Decimal):
        self.total_debit = total_debit
        self.total_credit = total_credit
        self.difference = total_debit - total_credit
        super().__init__(entry_not_balanced(total_debit, total_credit))


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class OwnershipError(DomainError):
    """Referenced resource belongs to a different owner."""


def account_not_found(code: str) -> str:
    """Return message for missing account code."""
    return f"Account '{code}' not found"


def entry_not_found(entry_id: str) -> str:
    """Return message for missing journal entry."""
    return f"Journal entry {entry_id} not found"


def transaction_not_found(transaction_id: str) -> str:
    """Return message for missing bank transaction."""
    return f"Bank transaction {transaction_id} not found"


def entry_not_owned(entry_id: str, owner_id: str) -> str:
    """Return message for an entry requested by the wrong owner."""
    return f"Journal entry {entry_id} does not belong to owner '{owner_id}'"


def entry_not_balanced(total_debit: Decimal, total_credit: Decimal) -> str:
    """Return message for an unbalanced journal entry."""
    return (
        f"Journal entry is not balanced: total debit {total_debit} "
        f"!= total credit {total_credit}"
    )


def invalid_choice(field: str, value: object, choices: list[str]) -> str:
    """Return message for a value outside a closed set."""
    return f"Invalid {field} '{value}'. Expected one of: {', '.join(choices)}"
