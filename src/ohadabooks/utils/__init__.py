"""Utility functions for ohadabooks."""

from ohadabooks.utils.date_parser import parse_date, get_date_range
from ohadabooks.utils.amount_parser import parse_amount

__all__ = ["parse_date", "get_date_range", "parse_amount"]
