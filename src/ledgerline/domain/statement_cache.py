"""Explicit, invalidatable cache for computed statements."""

from datetime import date
from threading import Lock
from typing import Optional

from ledgerline.domain.entities import Statement

CacheKey = tuple[int, int, Optional[date], Optional[date]]


class StatementCache:
    """Cache of statements keyed by entity, revision and date range.

    Every change to an entity or to one of its records must go through
    ``invalidate``, which bumps the entity's revision so older entries are
    never served again.
    """

    def __init__(self):
        self._statements: dict[CacheKey, Statement] = {}
        self._revisions: dict[int, int] = {}
        self._lock = Lock()

    def revision(self, entity_id: int) -> int:
        return self._revisions.get(entity_id, 0)

    def key(
        self, entity_id: int, start: Optional[date], end: Optional[date]
    ) -> CacheKey:
        return (entity_id, self.revision(entity_id), start, end)

    def get(
        self, entity_id: int, start: Optional[date], end: Optional[date]
    ) -> Optional[Statement]:
        with self._lock:
            return self._statements.get(self.key(entity_id, start, end))

    def put(
        self,
        entity_id: int,
        start: Optional[date],
        end: Optional[date],
        statement: Statement,
        revision: Optional[int] = None,
    ) -> bool:
        """Store a statement built from records read at ``revision``.

        If the entity was invalidated since then the statement is stale and
        is dropped. Returns whether it was stored.
        """
        with self._lock:
            if revision is not None and revision != self.revision(entity_id):
                return False
            self._statements[self.key(entity_id, start, end)] = statement
            return True

    def invalidate(self, entity_id: int) -> None:
        """Drop every cached statement of an entity."""
        with self._lock:
            self._revisions[entity_id] = self.revision(entity_id) + 1
            stale = [key for key in self._statements if key[0] == entity_id]
            for key in stale:
                del self._statements[key]

    def clear(self) -> None:
        with self._lock:
            self._statements.clear()
            self._revisions.clear()

    def __len__(self) -> int:
        return len(self._statements)
