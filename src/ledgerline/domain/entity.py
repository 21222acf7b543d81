"""Client and supplier domain service."""

from decimal import Decimal
from typing import Optional

from ledgerline.database.base import Database
from ledgerline.domain.entities import Entity, EntityKind, EntityStatus
from ledgerline.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    duplicate_entity_name,
    entity_name_not_found,
    entity_not_found,
)
from ledgerline.domain.statement_cache import StatementCache


class EntityService:
    """Service for managing clients and suppliers."""

    def __init__(self, db: Database, cache: Optional[StatementCache] = None):
        """Initialize entity service.

        Args:
            db: Database instance
            cache: Optional statement cache to invalidate on changes
        """
        self.db = db
        self.cache = cache

    def create_entity(
        self,
        name: str,
        kind: EntityKind,
        opening_balance: Decimal = Decimal("0"),
        credit_limit: Optional[Decimal] = None,
        status: EntityStatus = EntityStatus.ACTIVE,
        branch_id: Optional[int] = None,
    ) -> int:
        """Create a client or supplier.

        Args:
            name: Display name, unique per kind
            kind: Client or supplier
            opening_balance: Signed balance before any recorded transaction
            credit_limit: Optional credit limit
            status: Initial status
            branch_id: Optional owning branch

        Returns:
            Entity ID

        Raises:
            ValidationError: If the name is empty or the credit limit negative
            ConflictError: If an entity of the same kind has the same name
        """
        name = name.strip()
        if not name:
            raise ValidationError("Entity name cannot be empty")
        if credit_limit is not None and credit_limit < 0:
            raise ValidationError("Credit limit cannot be negative")

        kind = EntityKind(kind)
        if self.db.get_entity_by_name(name, kind=kind) is not None:
            raise ConflictError(duplicate_entity_name(name, kind.value))

        return self.db.create_entity(
            name=name,
            kind=kind,
            opening_balance=opening_balance,
            credit_limit=credit_limit,
            status=EntityStatus(status),
            branch_id=branch_id,
        )

    def get_entity(self, entity_id: int) -> Optional[Entity]:
        """Get entity by ID, or None if not found."""
        return self.db.get_entity(entity_id)

    def list_entities(
        self, kind: Optional[EntityKind] = None, branch_id: Optional[int] = None
    ) -> list[Entity]:
        return self.db.list_entities(kind=kind, branch_id=branch_id)

    def resolve_entity(self, entity: str | int, kind: Optional[EntityKind] = None) -> Entity:
        """Resolve an entity name or ID to the entity.

        Args:
            entity: Entity name, or ID as int or numeric string
            kind: Optional kind the entity must have

        Raises:
            NotFoundError: If no matching entity exists
        """
        found: Optional[Entity] = None
        try:
            entity_id = int(entity)
        except (TypeError, ValueError):
            found = self.db.get_entity_by_name(str(entity), kind=kind)
            if found is None:
                raise NotFoundError(entity_name_not_found(str(entity)))
        else:
            found = self.db.get_entity(entity_id)
            if found is None:
                raise NotFoundError(entity_not_found(entity_id))

        if kind is not None and found.kind != kind:
            raise NotFoundError(f"{found.name} is not a {EntityKind(kind).value}")
        return found

    def set_status(self, entity_id: int, status: EntityStatus) -> None:
        """Change the status of an entity.

        Raises:
            NotFoundError: If the entity does not exist
        """
        if self.db.get_entity(entity_id) is None:
            raise NotFoundError(entity_not_found(entity_id))
        self.db.update_entity(entity_id, status=EntityStatus(status))

    def set_opening_balance(self, entity_id: int, opening_balance: Decimal) -> None:
        """Change the opening balance, invalidating cached statements.

        Raises:
            NotFoundError: If the entity does not exist
        """
        if self.db.get_entity(entity_id) is None:
            raise NotFoundError(entity_not_found(entity_id))
        self.db.update_entity(entity_id, opening_balance=opening_balance)
        if self.cache is not None:
            self.cache.invalidate(entity_id)
