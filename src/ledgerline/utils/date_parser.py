"""Date parsing utilities."""

import logging
from datetime import date, datetime, timedelta
from typing import Any, Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

logger = logging.getLogger(__name__)

# Non-ISO layouts accepted for stored record dates
RECORD_DATE_FORMATS = (
    "%Y/%m/%d",
    "%d/%m/%Y",
    "%d-%m-%Y",
    "%Y/%m/%d %H:%M:%S",
    "%d/%m/%Y %H:%M:%S",
)

PERIODS = (
    "this-month",
    "this-year",
    "this-week",
    "last-month",
    "last-year",
    "last-week",
)


def _monday(day: date) -> date:
    return day - timedelta(days=day.weekday())


def _relative_start(direction: str, unit: str, today: date) -> Optional[date]:
    """Return the first day of a relative period such as "last month"."""
    shift = {"last": -1, "this": 0, "next": 1}[direction]
    if unit == "month":
        return (today + relativedelta(months=shift)).replace(day=1)
    if unit == "year":
        return today.replace(month=1, day=1) + relativedelta(years=shift)
    if unit == "week":
        return _monday(today) + timedelta(weeks=shift)
    return None


def parse_date(date_str: str) -> date:
    """Parse a user-supplied date string into a date object.

    Supports absolute dates ("2024-01-15", "January 15, 2024") and relative
    ones: "today", "yesterday", "tomorrow", and "last/this/next" followed by
    "week", "month" or "year", which resolve to the first day of that period.

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    fixed = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if date_str in fixed:
        return fixed[date_str]

    direction, _, unit = date_str.partition(" ")
    if direction in ("last", "this", "next"):
        start = _relative_start(direction, unit, today)
        if start is not None:
            return start

    try:
        return date_parser.parse(date_str).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def get_date_range(period: str) -> tuple[date, date]:
    """Get inclusive start and end dates for a named reporting period.

    "this-*" periods end today; "last-*" periods cover the whole previous
    week, month or year.

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    today = date.today()

    if period == "this-month":
        return (today.replace(day=1), today)
    if period == "this-year":
        return (today.replace(month=1, day=1), today)
    if period == "this-week":
        return (_monday(today), today)
    if period == "last-month":
        first_of_month = today.replace(day=1)
        return (first_of_month - relativedelta(months=1), first_of_month - timedelta(days=1))
    if period == "last-year":
        first_of_year = today.replace(month=1, day=1)
        return (first_of_year - relativedelta(years=1), first_of_year - timedelta(days=1))
    if period == "last-week":
        start = _monday(today) - timedelta(weeks=1)
        return (start, start + timedelta(days=6))

    raise ValueError(
        f"Unknown period: '{period}'. Supported periods: {', '.join(PERIODS)}"
    )


def to_calendar_date(value: Any) -> Optional[date]:
    """Reduce a record's date value to a calendar date.

    Accepts date and datetime objects, ISO-8601 date or timestamp strings and
    the layouts in RECORD_DATE_FORMATS. The time of day is dropped. Returns
    None for missing or unparseable values instead of raising; fragments such
    as "5" are unparseable rather than completed from today's date.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = str(value).strip()
    if not text:
        return None
    try:
        return date_parser.isoparse(text).date()
    except (ValueError, OverflowError):
        pass
    for fmt in RECORD_DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    logger.warning("Unparseable record date %r", value)
    return None
