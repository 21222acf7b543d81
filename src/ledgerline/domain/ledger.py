"""Account ledger engine and statement service.

``build_statement`` is the single fold behind client and supplier statements:
source records are date-filtered, normalized, ordered by date and folded
against the opening balance into running balances.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Any, Iterable, Optional, Sequence, Union

from ledgerline.database.base import Database
from ledgerline.domain.date_filter import DateBound, coerce_bound, filter_by_date_range
from ledgerline.domain.entities import (
    Entity,
    EntityKind,
    LedgerEntry,
    RecordKind,
    SourceType,
    Statement,
    StatementLine,
)
from ledgerline.domain.errors import NotFoundError, entity_not_found
from ledgerline.domain.normalizer import get_field, normalize
from ledgerline.domain.statement_cache import StatementCache
from ledgerline.utils.amount_parser import ZERO, parse_amount_or_zero

logger = logging.getLogger(__name__)

OPENING_BALANCE_LABEL = "Opening balance"

# Same-day order of sources in the convenience builders: invoices first,
# then vouchers, then adjustments.
SOURCE_ORDER = (
    SourceType.SALE,
    SourceType.PURCHASE,
    SourceType.RECEIPT,
    SourceType.PAYMENT,
    SourceType.ADJUSTMENT,
)

LedgerSource = Union[LedgerEntry, tuple[Iterable[Any], SourceType]]


def opening_balance_of(entity: Optional[Any]) -> Decimal:
    """Opening balance of an entity; a missing entity or balance counts as 0."""
    if entity is None:
        return ZERO
    return coerce_balance(get_field(entity, "opening_balance"))


def coerce_balance(value: Any) -> Decimal:
    """Signed opening balance; None and malformed values become zero."""
    if value is None:
        return ZERO
    return parse_amount_or_zero(value, context="opening balance", allow_negative=True)


def opening_line(opening_balance: Decimal) -> StatementLine:
    """Synthetic line zero carrying the opening balance."""
    entry = LedgerEntry(
        date=None,
        description=OPENING_BALANCE_LABEL,
        debit=ZERO,
        credit=ZERO,
        source_type=None,
        source_id=None,
    )
    return StatementLine(entry=entry, running_balance=opening_balance)


def _entry_sort_key(entry: LedgerEntry) -> tuple[bool, date]:
    # Undated entries go after every dated one
    return (entry.date is None, entry.date or date.min)


def sort_entries(entries: Iterable[LedgerEntry]) -> list[LedgerEntry]:
    """Order entries by date; entries of the same day keep their given order."""
    return sorted(entries, key=_entry_sort_key)


def fold_entries(
    opening_balance: Decimal, entries: Iterable[LedgerEntry]
) -> tuple[StatementLine, ...]:
    """Apply entries in order, pairing each with the balance after it."""
    balance = opening_balance
    lines = [opening_line(opening_balance)]
    for entry in entries:
        balance = balance + entry.debit - entry.credit
        lines.append(StatementLine(entry=entry, running_balance=balance))
    return tuple(lines)


def collect_entries(
    sources: Iterable[LedgerSource],
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> list[LedgerEntry]:
    """Date-filter and normalize every source, in the order given.

    Each source is either a ``(records, source_type)`` pair or an already
    normalized LedgerEntry.
    """
    entries: list[LedgerEntry] = []
    for source in sources:
        if isinstance(source, LedgerEntry):
            entries.extend(
                filter_by_date_range([source], start, end, date_of=lambda e: e.date)
            )
            continue

        records, source_type = source
        for record in filter_by_date_range(records, start, end):
            entries.append(normalize(record, source_type))
    return entries


def build_statement(
    opening_balance: Any,
    sources: Iterable[LedgerSource] = (),
    start: DateBound = None,
    end: DateBound = None,
) -> Statement:
    """Build an account statement with a running balance per line.

    The opening balance is never date-filtered: it always anchors line zero.
    The closing balance equals the opening balance plus all debits minus all
    credits that fall inside the window. An empty input yields a statement
    holding only the opening-balance line.

    Args:
        opening_balance: Balance before any entry (None counts as 0)
        sources: ``(records, source_type)`` pairs and/or LedgerEntry values
        start: Optional first day of the window
        end: Optional last day of the window

    Returns:
        Immutable Statement
    """
    start_date = coerce_bound(start)
    end_date = coerce_bound(end)
    entries = sort_entries(collect_entries(sources, start_date, end_date))
    lines = fold_entries(coerce_balance(opening_balance), entries)
    return Statement(lines=lines, start_date=start_date, end_date=end_date)


def _is_posted(record: Any) -> bool:
    posted = get_field(record, "posted")
    return posted is None or bool(posted)


def build_client_statement(
    client: Optional[Any],
    sales: Sequence[Any],
    receipts: Sequence[Any],
    start: DateBound = None,
    end: DateBound = None,
    adjustments: Sequence[Any] = (),
    posted_only: bool = True,
) -> Statement:
    """Statement of what a client owes: sales raise it, receipts lower it.

    With ``posted_only``, sales not yet posted to the client account are left
    out. Records lacking a ``posted`` field count as posted.
    """
    if posted_only:
        sales = [sale for sale in sales if _is_posted(sale)]
    return build_statement(
        opening_balance_of(client),
        [
            (sales, SourceType.SALE),
            (receipts, SourceType.RECEIPT),
            (adjustments, SourceType.ADJUSTMENT),
        ],
        start,
        end,
    )


def build_supplier_statement(
    supplier: Optional[Any],
    purchases: Sequence[Any],
    payments: Sequence[Any],
    start: DateBound = None,
    end: DateBound = None,
    adjustments: Sequence[Any] = (),
) -> Statement:
    """Statement of what is owed to a supplier: purchases raise it, payments lower it."""
    return build_statement(
        opening_balance_of(supplier),
        [
            (purchases, SourceType.PURCHASE),
            (payments, SourceType.PAYMENT),
            (adjustments, SourceType.ADJUSTMENT),
        ],
        start,
        end,
    )


class LedgerService:
    """Service for building entity statements from persisted records."""

    def __init__(self, db: Database, cache: Optional[StatementCache] = None):
        """Initialize ledger service.

        Args:
            db: Database instance
            cache: Optional statement cache shared with the writing services
        """
        self.db = db
        self.cache = cache

    def get_entity(self, entity_id: int) -> Entity:
        entity = self.db.get_entity(entity_id)
        if entity is None:
            raise NotFoundError(entity_not_found(entity_id))
        return entity

    def get_statement(
        self,
        entity_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        posted_only: bool = True,
    ) -> Statement:
        """Build the statement of a client or supplier.

        Args:
            entity_id: Client or supplier ID
            start_date: Optional start date filter
            end_date: Optional end date filter
            posted_only: For clients, leave out sales not yet posted

        Returns:
            Statement for the entity

        Raises:
            NotFoundError: If the entity does not exist
        """
        use_cache = self.cache is not None and posted_only
        revision = None
        if use_cache:
            # Revision as of the reads below; put() drops the result if it moved
            revision = self.cache.revision(entity_id)

        entity = self.get_entity(entity_id)
        if use_cache:
            cached = self.cache.get(entity_id, start_date, end_date)
            if cached is not None:
                return cached

        records = self.db.list_records(entity_id=entity_id)
        by_kind: dict[RecordKind, list] = {kind: [] for kind in RecordKind}
        for record in records:
            by_kind[record.kind].append(record)

        if entity.kind == EntityKind.CLIENT:
            statement = build_client_statement(
                entity,
                by_kind[RecordKind.SALE],
                by_kind[RecordKind.RECEIPT],
                start_date,
                end_date,
                adjustments=by_kind[RecordKind.ADJUSTMENT],
                posted_only=posted_only,
            )
        else:
            statement = build_supplier_statement(
                entity,
                by_kind[RecordKind.PURCHASE],
                by_kind[RecordKind.PAYMENT],
                start_date,
                end_date,
                adjustments=by_kind[RecordKind.ADJUSTMENT],
            )

        logger.debug(
            "Built statement for %s %s with %d lines",
            entity.kind.value,
            entity_id,
            len(statement),
        )
        if use_cache:
            if not self.cache.put(entity_id, start_date, end_date, statement, revision):
                logger.debug(
                    "Entity %s changed while its statement was built, not cached",
                    entity_id,
                )
        return statement

    def get_current_balance(self, entity_id: int) -> Decimal:
        """Balance of an entity after all of its records."""
        return self.get_statement(entity_id).closing_balance

    def get_current_balances(self, entities: Iterable[Entity]) -> dict[int, Decimal]:
        return {entity.id: self.get_current_balance(entity.id) for entity in entities}
