"""Mapper functions to convert SQLAlchemy models into domain entities.

This layer isolates the conversion logic, making it easy to change when
the database schema changes.
"""

from decimal import Decimal

from ledgerline.domain import entities as domain
from ledgerline.database.models import (
    Entity as ORMEntity,
    SourceRecord as ORMSourceRecord,
)


def entity_to_domain(orm_entity: ORMEntity) -> domain.Entity:
    """Convert SQLAlchemy Entity model to domain Entity."""
    credit_limit = orm_entity.credit_limit
    return domain.Entity(
        id=orm_entity.id,
        name=orm_entity.name,
        kind=domain.EntityKind(orm_entity.kind),
        opening_balance=Decimal(orm_entity.opening_balance or 0),
        status=domain.EntityStatus(orm_entity.status),
        created_at=orm_entity.created_at,
        credit_limit=Decimal(credit_limit) if credit_limit is not None else None,
        branch_id=orm_entity.branch_id,
    )


def record_to_domain(orm_record: ORMSourceRecord) -> domain.SourceRecord:
    """Convert SQLAlchemy SourceRecord model to domain SourceRecord."""
    direction = orm_record.direction
    return domain.SourceRecord(
        id=orm_record.id,
        kind=domain.RecordKind(orm_record.kind),
        date=orm_record.date,
        amount=orm_record.amount,
        created_at=orm_record.created_at,
        entity_id=orm_record.entity_id,
        branch_id=orm_record.branch_id,
        reference=orm_record.reference,
        description=orm_record.description,
        direction=domain.EntryDirection(direction) if direction else None,
        posted=bool(orm_record.posted),
    )
