"""Source record domain service."""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from ledgerline.database.base import Database
from ledgerline.domain.entities import (
    EntityKind,
    EntryDirection,
    RecordKind,
    SourceRecord,
)
from ledgerline.domain.errors import (
    NotFoundError,
    ValidationError,
    entity_not_found,
    invalid_amount,
    record_entity_mismatch,
)
from ledgerline.domain.statement_cache import StatementCache
from ledgerline.utils.amount_parser import to_decimal

logger = logging.getLogger(__name__)

# Kind of account each record kind may be posted to
ENTITY_KIND_FOR_RECORD = {
    RecordKind.SALE: EntityKind.CLIENT,
    RecordKind.RECEIPT: EntityKind.CLIENT,
    RecordKind.PURCHASE: EntityKind.SUPPLIER,
    RecordKind.PAYMENT: EntityKind.SUPPLIER,
}

# Vouchers and adjustments only exist against an account
REQUIRES_ENTITY = frozenset({RecordKind.RECEIPT, RecordKind.PAYMENT, RecordKind.ADJUSTMENT})


class RecordService:
    """Service for recording invoices, vouchers, adjustments and expenses."""

    def __init__(self, db: Database, cache: Optional[StatementCache] = None):
        """Initialize record service.

        Args:
            db: Database instance
            cache: Optional statement cache to invalidate on changes
        """
        self.db = db
        self.cache = cache

    def _validate_amount(self, amount: Decimal | str) -> Decimal:
        try:
            value = to_decimal(amount)
        except ValueError as e:
            raise ValidationError(invalid_amount(str(amount), str(e)))
        if value < 0:
            raise ValidationError(invalid_amount(str(amount), "must not be negative"))
        return value

    def _validate_entity(self, kind: RecordKind, entity_id: Optional[int]):
        if entity_id is None:
            if kind in REQUIRES_ENTITY:
                raise ValidationError(f"A {kind.value} record needs a client or supplier")
            return None

        if kind is RecordKind.EXPENSE:
            raise ValidationError("Expenses are not posted to a client or supplier")

        entity = self.db.get_entity(entity_id)
        if entity is None:
            raise NotFoundError(entity_not_found(entity_id))

        expected = ENTITY_KIND_FOR_RECORD.get(kind)
        if expected is not None and entity.kind != expected:
            raise ValidationError(record_entity_mismatch(kind.value, entity.kind.value))
        return entity

    def add_record(
        self,
        kind: RecordKind,
        date: date,
        amount: Decimal | str,
        entity_id: Optional[int] = None,
        branch_id: Optional[int] = None,
        reference: Optional[str] = None,
        description: Optional[str] = None,
        direction: Optional[EntryDirection] = None,
        posted: bool = True,
    ) -> int:
        """Record a sale, purchase, receipt, payment, adjustment or expense.

        The record's branch defaults to the branch of its entity.

        Args:
            kind: Record kind
            date: Record date
            amount: Non-negative amount
            entity_id: Client or supplier the record is posted to
            branch_id: Optional branch
            reference: Optional invoice or voucher number
            description: Optional description
            direction: Ledger side, required for adjustments
            posted: For sales, whether the sale is posted to the client account

        Returns:
            Record ID

        Raises:
            ValidationError: If the amount, direction or entity kind is invalid
            NotFoundError: If the entity does not exist
        """
        kind = RecordKind(kind)
        value = self._validate_amount(amount)
        entity = self._validate_entity(kind, entity_id)

        if kind is RecordKind.ADJUSTMENT:
            if direction is None:
                raise ValidationError("An adjustment needs a direction (debit or credit)")
            direction = EntryDirection(direction)
        elif direction is not None:
            raise ValidationError("Only adjustments take a direction")

        if branch_id is None and entity is not None:
            branch_id = entity.branch_id

        record_id = self.db.create_record(
            kind=kind,
            date=date.isoformat(),
            amount=str(value),
            entity_id=entity_id,
            branch_id=branch_id,
            reference=reference,
            description=description,
            direction=direction,
            posted=posted,
        )
        logger.info("Recorded %s %s (amount %s)", kind.value, record_id, value)
        self._invalidate(entity_id)
        return record_id

    def get_record(self, record_id: int) -> Optional[SourceRecord]:
        return self.db.get_record(record_id)

    def list_records(
        self,
        kind: Optional[RecordKind] = None,
        entity_id: Optional[int] = None,
        branch_id: Optional[int] = None,
    ) -> list[SourceRecord]:
        """List records in the order they were recorded."""
        return self.db.list_records(kind=kind, entity_id=entity_id, branch_id=branch_id)

    def set_posted(self, record_id: int, posted: bool = True) -> None:
        """Post a sale to, or withdraw it from, the client account.

        Raises:
            NotFoundError: If the record does not exist
            ValidationError: If the record is not a sale
        """
        record = self.db.get_record(record_id)
        if record is None:
            raise NotFoundError(f"Record {record_id} not found")
        if record.kind is not RecordKind.SALE:
            raise ValidationError("Only sales can be posted to a client account")
        self.db.update_record_posted(record_id, posted)
        self._invalidate(record.entity_id)

    def delete_record(self, record_id: int) -> None:
        """Delete a record.

        Raises:
            NotFoundError: If the record does not exist
        """
        record = self.db.get_record(record_id)
        if record is None:
            raise NotFoundError(f"Record {record_id} not found")
        self.db.delete_record(record_id)
        self._invalidate(record.entity_id)

    def _invalidate(self, entity_id: Optional[int]) -> None:
        if self.cache is not None and entity_id is not None:
            self.cache.invalidate(entity_id)
