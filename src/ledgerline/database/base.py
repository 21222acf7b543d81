"""Abstract database interface."""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Optional

from ledgerline.domain.entities import (
    Entity,
    EntityKind,
    EntityStatus,
    EntryDirection,
    RecordKind,
    SourceRecord,
)


class Database(ABC):
    """Abstract database interface for ledgerline.

    The database is a data source only: it stores entities and raw records
    and returns them as domain values. Balances and reports are never stored.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Entity operations
    @abstractmethod
    def create_entity(
        self,
        name: str,
        kind: EntityKind,
        opening_balance: Decimal,
        credit_limit: Optional[Decimal] = None,
        status: EntityStatus = EntityStatus.ACTIVE,
        branch_id: Optional[int] = None,
    ) -> int:
        """Create a client or supplier. Returns entity ID."""
        pass

    @abstractmethod
    def get_entity(self, entity_id: int) -> Optional[Entity]:
        """Get entity by ID."""
        pass

    @abstractmethod
    def get_entity_by_name(
        self, name: str, kind: Optional[EntityKind] = None
    ) -> Optional[Entity]:
        """Get entity by name, optionally restricted to one kind."""
        pass

    @abstractmethod
    def list_entities(
        self, kind: Optional[EntityKind] = None, branch_id: Optional[int] = None
    ) -> list[Entity]:
        """List entities ordered by name, optionally filtered."""
        pass

    @abstractmethod
    def update_entity(
        self,
        entity_id: int,
        status: Optional[EntityStatus] = None,
        opening_balance: Optional[Decimal] = None,
    ) -> None:
        """Update entity status and/or opening balance."""
        pass

    # Record operations
    @abstractmethod
    def create_record(
        self,
        kind: RecordKind,
        date: Optional[str],
        amount: Optional[str],
        entity_id: Optional[int] = None,
        branch_id: Optional[int] = None,
        reference: Optional[str] = None,
        description: Optional[str] = None,
        direction: Optional[EntryDirection] = None,
        posted: bool = True,
    ) -> int:
        """Store a raw record. Date and amount are kept as given. Returns record ID."""
        pass

    @abstractmethod
    def get_record(self, record_id: int) -> Optional[SourceRecord]:
        """Get record by ID."""
        pass

    @abstractmethod
    def list_records(
        self,
        kind: Optional[RecordKind] = None,
        entity_id: Optional[int] = None,
        branch_id: Optional[int] = None,
    ) -> list[SourceRecord]:
        """List records in insertion order with optional filters.

        Args:
            kind: Optional record kind filter
            entity_id: Optional client or supplier filter
            branch_id: Optional branch filter
        """
        pass

    @abstractmethod
    def update_record_posted(self, record_id: int, posted: bool) -> None:
        """Set whether a sale is posted to its client account."""
        pass

    @abstractmethod
    def delete_record(self, record_id: int) -> None:
        """Delete a record."""
        pass

    @abstractmethod
    def list_branch_ids(self) -> list[int]:
        """Distinct branch IDs referenced by records, ascending."""
        pass
