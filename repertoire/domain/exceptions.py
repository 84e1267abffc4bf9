"""Domain exceptions.

Use cases raise these; translating them into transport-level errors is up to
the caller. Persistence failures are not wrapped and propagate unchanged.
"""

from typing import Any


class RepertoireError(Exception):
    """Base exception for all repertoire domain errors."""

    def __init__(self, message: str, *args: Any) -> None:
        super().__init__(message, *args)
        self.message = message


class NotFoundError(RepertoireError):
    """Raised when a referenced entity does not exist."""

    def __init__(self, entity_type: str, entity_id: Any = None) -> None:
        if entity_id is None:
            message = f"{entity_type} not found"
        else:
            message = f"{entity_type} with id {entity_id} not found"
        super().__init__(message)
        self.entity_type = entity_type
        self.entity_id = entity_id


class ConflictError(RepertoireError):
    """Raised when a change contradicts the entity's current state."""


class BadRequestError(RepertoireError):
    """Raised when the request itself is inconsistent."""
