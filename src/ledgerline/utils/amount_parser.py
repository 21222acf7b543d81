"""Amount parsing utilities."""

import logging
import re
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

logger = logging.getLogger(__name__)

ZERO = Decimal("0")

# Largest decimal exponent accepted for a monetary amount
MAX_AMOUNT_EXPONENT = 18


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "ر.س 123.45" / "$123.45"
    - "-123.45"
    - "1,234.56"
    - "(123.45)" (negative in parentheses)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    # Handle parentheses notation (negative)
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    # Remove currency symbols and codes
    amount_str = re.sub(r"[$€£¥]|ر\.س|ريال|SAR", "", amount_str)
    amount_str = amount_str.replace(",", "").strip()

    try:
        amount = Decimal(amount_str)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")

    if not amount.is_finite():
        raise ValueError(f"Amount '{amount_str}' is not a finite number")
    return -amount if is_negative else amount


def _check_magnitude(amount: Decimal) -> Decimal:
    if amount and abs(amount.adjusted()) > MAX_AMOUNT_EXPONENT:
        raise ValueError(f"Amount {amount} is out of range")
    return amount


def to_decimal(value: Any) -> Decimal:
    """Convert a raw numeric value (number or numeric string) to Decimal.

    Values too large or too small to be money are rejected, so sums over
    them stay within the decimal context.

    Raises:
        ValueError: If the value is missing, not numeric or out of range
    """
    if value is None:
        raise ValueError("Missing amount")
    if isinstance(value, bool):
        raise ValueError(f"Boolean is not an amount: {value!r}")
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise ValueError(f"Amount {value!r} is not a finite number")
        return _check_magnitude(value)
    if isinstance(value, int):
        return _check_magnitude(Decimal(value))
    if isinstance(value, float):
        # str() keeps the shortest repr, so 0.1 stays 0.1
        return to_decimal(Decimal(str(value)))
    return _check_magnitude(parse_amount(str(value)))


def parse_amount_or_zero(
    value: Any, *, context: Optional[str] = None, allow_negative: bool = False
) -> Decimal:
    """Parse an amount tolerantly, substituting zero for malformed input.

    A malformed amount never raises: it is logged as a warning and counted as
    zero so one bad record degrades a total instead of aborting it.

    Args:
        value: Raw amount (Decimal, int, float, numeric string or None)
        context: Optional label of the record the amount belongs to, used in
            the log message
        allow_negative: If False, negative amounts are treated as malformed

    Returns:
        Parsed Decimal, or zero
    """
    label = f" on {context}" if context else ""
    try:
        amount = to_decimal(value)
    except ValueError as e:
        logger.warning("Malformed amount %r%s, counted as 0: %s", value, label, e)
        return ZERO

    if amount < 0 and not allow_negative:
        logger.warning("Negative amount %r%s, counted as 0", value, label)
        return ZERO
    return amount
