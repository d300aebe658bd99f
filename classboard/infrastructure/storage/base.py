# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Abstract entity store shared by all services.

Services depend only on EntityStore, never on a concrete backend, so the
same service code runs against the in-memory store in tests and the
SQLAlchemy store in deployment.

The store offers single-record operations only. Each create or update is
atomic on its own; there are no transactions spanning several records,
so callers that write more than one record must order their writes and
accept that a failure can leave the earlier ones in place.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from typing import Any, Optional, TypeVar

from classboard.models.common import EntityModel

EntityT = TypeVar("EntityT", bound=EntityModel)

Predicate = Callable[[EntityT], bool]


class StoreError(Exception):
    """Raised when the underlying storage fails.

    Attributes:
        message: Human-readable error description.
        original_error: The backend exception, if any.
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.message = message
        self.original_error = original_error

    def __str__(self) -> str:
        if self.original_error:
            return f"{self.message}: {self.original_error}"
        return self.message


def check_fields(model: type[EntityModel], names: Iterable[str]) -> None:
    """Reject field names the entity does not declare.

    Raises:
        StoreError: If any name is not a field of ``model``.
    """
    unknown = sorted(set(names) - set(model.model_fields))
    if unknown:
        raise StoreError(f"Unknown {model.__name__} field(s): {', '.join(unknown)}")


class EntityStore(ABC):
    """Keyed record storage for ClassBoard entities.

    All methods are async. Records are pydantic entity models; the store
    hands out copies, so mutating a returned record never changes stored
    state.
    """

    @abstractmethod
    async def create(self, record: EntityT) -> EntityT:
        """Persist a new record.

        Args:
            record: Entity with its id already generated.

        Returns:
            The stored record.

        Raises:
            StoreError: If a record with the same id exists or the backend fails.
        """
        ...

    @abstractmethod
    async def get(self, model: type[EntityT], record_id: str) -> EntityT | None:
        """Look up a record by id.

        Returns:
            The record, or None if absent.
        """
        ...

    @abstractmethod
    async def find(
        self,
        model: type[EntityT],
        predicate: Predicate | None = None,
        **filters: Any,
    ) -> list[EntityT]:
        """List records matching equality filters and an optional predicate.

        Args:
            model: Entity type to list.
            predicate: Extra test applied to each candidate record.
            **filters: Field name to required value.

        Returns:
            Matching records. Order is backend specific; callers that need
            an order sort the result themselves.
        """
        ...

    @abstractmethod
    async def update(
        self,
        model: type[EntityT],
        record_id: str,
        changes: dict[str, Any],
    ) -> EntityT | None:
        """Merge ``changes`` into an existing record.

        Returns:
            The updated record, or None if the id is absent (nothing is written).

        Raises:
            StoreError: If a field is unknown or the backend fails.
        """
        ...

    async def count(self, model: type[EntityT], **filters: Any) -> int:
        """Count records matching equality filters."""
        return len(await self.find(model, **filters))
