"""Utility functions for ledgerline."""

from ledgerline.utils.date_parser import parse_date, get_date_range, to_calendar_date
from ledgerline.utils.amount_parser import parse_amount, parse_amount_or_zero

__all__ = [
    "parse_date",
    "get_date_range",
    "to_calendar_date",
    "parse_amount",
    "parse_amount_or_zero",
]
