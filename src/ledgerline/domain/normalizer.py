"""Normalization of heterogeneous source records into ledger entries.

Records may be mappings (rows decoded from an API or a file) or objects such
as ``SourceRecord``; fields are looked up by name either way. The source type
is always supplied by the caller, never inferred from the record's shape.
"""

import logging
from collections.abc import Mapping
from datetime import date
from decimal import Decimal
from typing import Any, Optional

from ledgerline.domain.entities import EntryDirection, LedgerEntry, SourceType
from ledgerline.utils.amount_parser import ZERO, parse_amount_or_zero
from ledgerline.utils.date_parser import to_calendar_date

logger = logging.getLogger(__name__)

DATE_FIELDS = (
    "date",
    "sale_date",
    "purchase_date",
    "receipt_date",
    "payment_date",
    "created_at",
)

INVOICE_AMOUNT_FIELDS = ("total", "grand_total", "amount")
VOUCHER_AMOUNT_FIELDS = ("amount", "total")

DEBIT_SOURCES = frozenset({SourceType.SALE, SourceType.PURCHASE})
CREDIT_SOURCES = frozenset({SourceType.RECEIPT, SourceType.PAYMENT})

LABELS = {
    SourceType.SALE: "Sales invoice",
    SourceType.PURCHASE: "Purchase invoice",
    SourceType.RECEIPT: "Receipt voucher",
    SourceType.PAYMENT: "Payment voucher",
    SourceType.ADJUSTMENT: "Balance adjustment",
}


def get_field(record: Any, name: str) -> Any:
    """Read a field from a mapping or an object, returning None when absent."""
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def _first_present(record: Any, names: tuple[str, ...]) -> Any:
    for name in names:
        value = get_field(record, name)
        if value is not None and value != "":
            return value
    return None


def record_date(record: Any) -> Optional[date]:
    """Calendar date of a record, or None if it carries no parseable date."""
    return to_calendar_date(_first_present(record, DATE_FIELDS))


def record_amount(record: Any, source_type: Optional[SourceType] = None) -> Decimal:
    """Non-negative amount of a record; malformed or missing amounts are zero.

    Invoices (sales and purchases) are read from ``total`` first; vouchers and
    expenses from ``amount``.
    """
    if source_type in DEBIT_SOURCES:
        fields = INVOICE_AMOUNT_FIELDS
    else:
        fields = VOUCHER_AMOUNT_FIELDS
    return parse_amount_or_zero(
        _first_present(record, fields), context=describe_source(record, source_type)
    )


def describe_source(record: Any, source_type: Optional[SourceType]) -> str:
    """Short label identifying a record in log messages."""
    kind = source_type.value if source_type is not None else "record"
    record_id = get_field(record, "id")
    return f"{kind} {record_id}" if record_id is not None else kind


def _description(record: Any, source_type: SourceType) -> str:
    description = get_field(record, "description")
    if description:
        return str(description)

    label = LABELS[source_type]
    reference = _first_present(record, ("reference", "invoice_number", "voucher_number"))
    if reference is None or source_type is SourceType.ADJUSTMENT:
        return label
    return f"{label} #{reference}"


def _adjustment_direction(
    record: Any, direction: Optional[EntryDirection]
) -> EntryDirection:
    if direction is not None:
        return EntryDirection(direction)

    raw = get_field(record, "direction")
    if raw is not None:
        try:
            return EntryDirection(str(getattr(raw, "value", raw)).lower())
        except ValueError:
            pass

    logger.warning(
        "Adjustment %s has no valid direction, posted as debit",
        describe_source(record, SourceType.ADJUSTMENT),
    )
    return EntryDirection.DEBIT


def normalize(
    record: Any,
    source_type: SourceType,
    direction: Optional[EntryDirection] = None,
) -> LedgerEntry:
    """Convert a source record into a ledger entry.

    Sales and purchases are debits, receipts and payments are credits.
    Adjustments use ``direction`` when given, then the record's own
    ``direction`` field.

    A record whose amount cannot be parsed is still emitted, with a zero
    amount, so the statement shows it.

    Args:
        record: Mapping or object exposing a date field and an amount field
        source_type: Kind of source the record comes from
        direction: Explicit ledger side, used for adjustments only

    Returns:
        Normalized LedgerEntry
    """
    source_type = SourceType(source_type)
    amount = record_amount(record, source_type)

    if source_type in DEBIT_SOURCES:
        side = EntryDirection.DEBIT
    elif source_type in CREDIT_SOURCES:
        side = EntryDirection.CREDIT
    else:
        side = _adjustment_direction(record, direction)

    return LedgerEntry(
        date=record_date(record),
        description=_description(record, source_type),
        debit=amount if side is EntryDirection.DEBIT else ZERO,
        credit=amount if side is EntryDirection.CREDIT else ZERO,
        source_type=source_type,
        source_id=get_field(record, "id"),
    )


def normalize_all(records, source_type: SourceType) -> list[LedgerEntry]:
    """Normalize every record of one source, keeping their order."""
    return [normalize(record, source_type) for record in records]
