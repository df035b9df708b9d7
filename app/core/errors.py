"""
Domain Errors Module

Exceptions raised by the service layer. The API layer maps them onto HTTP
responses in app.main; malformed input never gets this far because FastAPI
rejects it with a 422 during request validation.
"""
from typing import Iterable


class TaskboardError(Exception):
    """Base class for every error the service layer raises on purpose."""


class NotFoundError(TaskboardError):
    """The update target does not exist."""

    def __init__(self, entity: str, entity_id: int):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} not found")


class ReferentialIntegrityError(TaskboardError):
    """One or more referenced category ids do not exist."""

    def __init__(self, missing_ids: Iterable[int]):
        self.missing_ids = sorted(missing_ids)
        super().__init__(
            f"One or more category IDs do not exist: {self.missing_ids}"
        )


class StorageError(TaskboardError):
    """The database rejected a statement or could not be reached."""
