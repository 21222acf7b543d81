"""Shared domain error messages and error types.

The computation core never raises these: malformed data degrades to zeros
and empty results. They are raised by the services that read and write
entities and records.
"""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for CLI error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


def entity_not_found(entity_id: int) -> str:
    """Return message for missing client or supplier."""
    return f"Entity {entity_id} not found"


def entity_name_not_found(name: str) -> str:
    """Return message for a client or supplier looked up by name."""
    return f"Entity '{name}' not found"


def duplicate_entity_name(name: str, kind: str) -> str:
    """Return message for a duplicate client or supplier name."""
    return f"A {kind} named '{name}' already exists"


def record_entity_mismatch(record_kind: str, entity_kind: str) -> str:
    """Return message when a record kind cannot be posted to an entity."""
    return f"A {record_kind} record cannot be posted to a {entity_kind} account"


def invalid_amount(value: str, reason: str) -> str:
    """Return message for an amount rejected at input time."""
    return f"Invalid amount '{value}': {reason}"
