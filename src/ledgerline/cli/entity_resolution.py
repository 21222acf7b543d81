"""CLI helper for resolving clients and suppliers."""

from __future__ import annotations

from typing import Optional

import click

from ledgerline.cli.error_handling import handle_domain_error
from ledgerline.domain.entities import Entity, EntityKind
from ledgerline.domain.entity import EntityService


def resolve_entity_or_exit(
    ctx: click.Context,
    entity_service: EntityService,
    entity: str | int,
    kind: Optional[EntityKind] = None,
) -> Entity:
    """Resolve an entity name or ID, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        return entity_service.resolve_entity(entity, kind=kind)
    except ValueError as exc:
        handle_domain_error(ctx, exc)
