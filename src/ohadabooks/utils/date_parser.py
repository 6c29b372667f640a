"""Date parsing utilities."""

from datetime import date, datetime, timedelta
from typing import Union

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from ohadabooks.domain.errors import ParseError

PERIODS = (
    "this-month",
    "this-quarter",
    "this-year",
    "last-month",
    "last-quarter",
    "last-year",
)


def parse_date(value: Union[date, str]) -> date:
    """Parse a date value.

    Supports:
    - date and datetime objects (datetimes are truncated to their date)
    - ISO and free-form absolute dates: "2024-01-15", "15 January 2024"
    - relative keywords: "today", "yesterday", "this month", "last month",
      "this year", "last year" (month and year keywords resolve to the first day)

    Args:
        value: Date value or string

    Returns:
        Date object

    Raises:
        ParseError: If the value cannot be parsed
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    date_str = value.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "this month": today.replace(day=1),
        "last month": (today - relativedelta(months=1)).replace(day=1),
        "this year": today.replace(month=1, day=1),
        "last year": today.replace(month=1, day=1) - relativedelta(years=1),
    }
    if date_str in relative_dates:
        return relative_dates[date_str]

    try:
        return date_parser.parse(date_str, yearfirst=True).date()
    except (ValueError, OverflowError) as e:
        raise ParseError(f"Could not parse date '{value}': {e}") from e


def _quarter_start(day: date) -> date:
    return day.replace(month=3 * ((day.month - 1) // 3) + 1, day=1)


def get_date_range(period: str) -> tuple[date, date]:
    """Get start and end dates for a reporting period.

    Current periods end today; past periods cover the whole period.

    Args:
        period: One of PERIODS

    Returns:
        Tuple of (start_date, end_date)

    Raises:
        ParseError: If the period is not recognized
    """
    period = period.strip().lower()
    today = date.today()

    if period == "this-month":
        return today.replace(day=1), today

    if period == "this-quarter":
        return _quarter_start(today), today

    if period == "this-year":
        return today.replace(month=1, day=1), today

    if period == "last-month":
        end_date = today.replace(day=1) - timedelta(days=1)
        return end_date.replace(day=1), end_date

    if period == "last-quarter":
        end_date = _quarter_start(today) - timedelta(days=1)
        return _quarter_start(end_date), end_date

    if period == "last-year":
        start_date = today.replace(month=1, day=1) - relativedelta(years=1)
        return start_date, start_date.replace(month=12, day=31)

    raise ParseError(
        f"Unknown period: '{period}'. Supported periods: {', '.join(PERIODS)}"
    )
