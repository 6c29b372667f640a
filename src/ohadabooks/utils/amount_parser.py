"""Amount parsing utilities."""

import re
from decimal import Decimal, InvalidOperation
from typing import Union

from ohadabooks.domain.errors import ParseError

AmountInput = Union[Decimal, int, float, str, None]

# Regular, non-breaking and narrow non-breaking spaces group thousands.
_SPACES = re.compile(r"[ \u00a0\u202f]")
_DECIMAL_COMMA = re.compile(r"[+-]?\d+,\d{1,2}")


def _grouped(integer_part: str, separator: str) -> bool:
    """Return True if integer_part is digits grouped by threes with separator."""
    return re.fullmatch(rf"[+-]?\d{{1,3}}(?:{re.escape(separator)}\d{{3}})+", integer_part) is not None


def _normalize_separators(amount_str: str, original: str) -> str:
    """Rewrite thousands and decimal separators to plain ``1234.56`` form."""
    if "," in amount_str and "." in amount_str:
        # The separator that comes last is the decimal one.
        if amount_str.rfind(",") > amount_str.rfind("."):
            decimal_sep, thousands_sep = ",", "."
        else:
            decimal_sep, thousands_sep = ".", ","
        integer_part, _, fraction = amount_str.rpartition(decimal_sep)
        if not _grouped(integer_part, thousands_sep):
            raise ParseError(f"Ambiguous amount '{original}'")
        return f"{integer_part.replace(thousands_sep, '')}.{fraction}"

    if "," in amount_str:
        if _DECIMAL_COMMA.fullmatch(amount_str):
            return amount_str.replace(",", ".")
        if _grouped(amount_str, ","):
            return amount_str.replace(",", "")
        raise ParseError(f"Ambiguous amount '{original}'")

    if amount_str.count(".") > 1 and _grouped(amount_str, "."):
        return amount_str.replace(".", "")
    return amount_str


def parse_amount(value: AmountInput) -> Decimal:
    """Parse a raw amount into a Decimal.

    Handles various formats:
    - Decimal, int and float values (floats go through ``str`` to keep
      their printed digits)
    - "123.45", "-123.45"
    - "$123.45", "1 500 FCFA"
    - "1,234.56", "1 234,56", "1.234,56", "12,50"
    - "(123.45)" (negative in parentheses)

    A comma followed by one or two final digits is a decimal comma; a comma
    or dot between groups of three digits separates thousands.

    Args:
        value: Raw amount

    Returns:
        Decimal amount

    Raises:
        ParseError: If the value cannot be parsed or its separators are
            ambiguous. Nothing is coerced to zero.
    """
    if isinstance(value, bool):
        raise ParseError(f"Could not parse amount {value!r}")
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise ParseError(f"Could not parse amount '{value}'")
        return value
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        value = str(value)
    if value is not None and not isinstance(value, str):
        raise ParseError(f"Could not parse amount {value!r}")

    if value is None or not value.strip():
        raise ParseError("Empty amount string")

    amount_str = value.strip()

    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    amount_str = re.sub(r"[$€£¥]|FCFA|XOF|XAF", "", amount_str)
    amount_str = _SPACES.sub("", amount_str)
    amount_str = _normalize_separators(amount_str, value)

    try:
        amount = Decimal(amount_str)
    except InvalidOperation as e:
        raise ParseError(f"Could not parse amount '{value}'") from e

    if not amount.is_finite():
        raise ParseError(f"Could not parse amount '{value}'")
    return -amount if is_negative else amount
