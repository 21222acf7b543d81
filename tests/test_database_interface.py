"""Tests for Database interface returning domain models."""

from datetime import datetime
from decimal import Decimal

import pytest

from ledgerline.domain import entities
from ledgerline.domain.entities import EntityKind, EntityStatus, EntryDirection, RecordKind
from ledgerline.domain.errors import NotFoundError


class TestDatabaseInterface:
    """Tests to verify Database interface returns domain models."""

    def test_get_entity_returns_domain_model(self, temp_db):
        entity_id = temp_db.create_entity(
            name="Al Noor Trading",
            kind=EntityKind.CLIENT,
            opening_balance=Decimal("1000.50"),
            credit_limit=Decimal("5000"),
            branch_id=3,
        )

        entity = temp_db.get_entity(entity_id)

        assert isinstance(entity, entities.Entity)
        assert entity.id == entity_id
        assert entity.kind == EntityKind.CLIENT
        assert entity.status == EntityStatus.ACTIVE
        assert entity.opening_balance == Decimal("1000.50")
        assert entity.credit_limit == Decimal("5000")
        assert entity.branch_id == 3
        assert isinstance(entity.created_at, datetime)

    def test_get_missing_entity_returns_none(self, temp_db):
        assert temp_db.get_entity(999) is None

    def test_get_entity_by_name_respects_kind(self, temp_db):
        temp_db.create_entity(name="Shared", kind=EntityKind.CLIENT, opening_balance=Decimal("0"))
        supplier_id = temp_db.create_entity(
            name="Shared", kind=EntityKind.SUPPLIER, opening_balance=Decimal("0")
        )

        found = temp_db.get_entity_by_name("Shared", kind=EntityKind.SUPPLIER)

        assert found.id == supplier_id

    def test_list_entities_filters_by_kind(self, temp_db):
        temp_db.create_entity(name="B Client", kind=EntityKind.CLIENT, opening_balance=Decimal("0"))
        temp_db.create_entity(name="A Client", kind=EntityKind.CLIENT, opening_balance=Decimal("0"))
        temp_db.create_entity(name="Supplier", kind=EntityKind.SUPPLIER, opening_balance=Decimal("0"))

        clients = temp_db.list_entities(kind=EntityKind.CLIENT)

        assert [c.name for c in clients] == ["A Client", "B Client"]

    def test_update_entity(self, temp_db):
        entity_id = temp_db.create_entity(
            name="Client", kind=EntityKind.CLIENT, opening_balance=Decimal("0")
        )

        temp_db.update_entity(entity_id, status=EntityStatus.BLOCKED, opening_balance=Decimal("12"))

        entity = temp_db.get_entity(entity_id)
        assert entity.status == EntityStatus.BLOCKED
        assert entity.opening_balance == Decimal("12")

    def test_update_missing_entity_raises(self, temp_db):
        with pytest.raises(NotFoundError):
            temp_db.update_entity(42, status=EntityStatus.INACTIVE)

    def test_records_keep_raw_text(self, temp_db):
        record_id = temp_db.create_record(
            kind=RecordKind.SALE, date="2024-01-05", amount="abc", reference="INV-1"
        )

        record = temp_db.get_record(record_id)

        assert isinstance(record, entities.SourceRecord)
        assert record.kind == RecordKind.SALE
        assert record.amount == "abc"
        assert record.date == "2024-01-05"
        assert record.posted is True
        assert record.direction is None

    def test_adjustment_direction_round_trip(self, temp_db):
        record_id = temp_db.create_record(
            kind=RecordKind.ADJUSTMENT,
            date="2024-01-05",
            amount="5",
            direction=EntryDirection.CREDIT,
        )
        assert temp_db.get_record(record_id).direction == EntryDirection.CREDIT

    def test_list_records_in_insertion_order_with_filters(self, temp_db):
        first = temp_db.create_record(kind=RecordKind.SALE, date="2024-02-01", amount="1", branch_id=1)
        temp_db.create_record(kind=RecordKind.EXPENSE, date="2024-01-01", amount="2", branch_id=1)
        third = temp_db.create_record(kind=RecordKind.SALE, date="2024-01-01", amount="3", branch_id=2)

        sales = temp_db.list_records(kind=RecordKind.SALE)
        branch_one = temp_db.list_records(branch_id=1)

        assert [r.id for r in sales] == [first, third]
        assert len(branch_one) == 2

    def test_update_posted_and_delete(self, temp_db):
        record_id = temp_db.create_record(kind=RecordKind.SALE, date="2024-01-05", amount="1")

        temp_db.update_record_posted(record_id, False)
        assert temp_db.get_record(record_id).posted is False

        temp_db.delete_record(record_id)
        assert temp_db.get_record(record_id) is None

    def test_list_branch_ids(self, temp_db):
        temp_db.create_record(kind=RecordKind.SALE, date="2024-01-05", amount="1", branch_id=3)
        temp_db.create_record(kind=RecordKind.SALE, date="2024-01-05", amount="1", branch_id=1)
        temp_db.create_record(kind=RecordKind.EXPENSE, date="2024-01-05", amount="1", branch_id=3)
        temp_db.create_record(kind=RecordKind.EXPENSE, date="2024-01-05", amount="1")

        assert temp_db.list_branch_ids() == [1, 3]
