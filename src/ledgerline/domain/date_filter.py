"""Inclusive calendar-date window over dated records."""

import logging
from datetime import date
from typing import Any, Iterable, Optional, TypeVar, Union

from ledgerline.domain.normalizer import record_date
from ledgerline.utils.date_parser import to_calendar_date

logger = logging.getLogger(__name__)

T = TypeVar("T")

DateBound = Union[date, str, None]


def coerce_bound(bound: DateBound) -> Optional[date]:
    """Turn a date bound (date, datetime or "YYYY-MM-DD") into a date.

    Empty or unparseable bounds count as absent, so that side of the window
    stays open. An unparseable bound is logged as a warning.
    """
    if bound is None or bound == "":
        return None
    parsed = to_calendar_date(bound)
    if parsed is None:
        logger.warning("Ignoring unparseable date bound %r, window left open", bound)
    return parsed


def in_date_range(
    item_date: Optional[date], start: Optional[date], end: Optional[date]
) -> bool:
    """Check a calendar date against an inclusive, possibly open window.

    Comparison is by calendar date, so anything on the end date, up to the last
    instant of that day, is inside the window.
    """
    if start is None and end is None:
        return True
    if item_date is None:
        return False
    if start is not None and item_date < start:
        return False
    if end is not None and item_date > end:
        return False
    return True


def filter_by_date_range(
    records: Iterable[T],
    start: DateBound = None,
    end: DateBound = None,
    date_of: Any = record_date,
) -> list[T]:
    """Restrict records to those dated within ``[start, end]``.

    Both bounds are inclusive and optional. With no bounds the result holds
    every record. A start after the end yields an empty list rather than an
    error. The input is never modified; a new list is always returned.

    Args:
        records: Records exposing a date field
        start: Optional first day of the window
        end: Optional last day of the window
        date_of: Function returning a record's calendar date

    Returns:
        New list with the records inside the window, in input order
    """
    start_date = coerce_bound(start)
    end_date = coerce_bound(end)
    if start_date is None and end_date is None:
        return list(records)
    return [
        record
        for record in records
        if in_date_range(date_of(record), start_date, end_date)
    ]
