# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""In-process entity store.

Keeps one dict per entity type. ``find`` returns records in insertion
order. Used by tests and for local demos seeded with
``classboard.infrastructure.database.seeds``.
"""

import logging
from collections import defaultdict
from typing import Any

from classboard.infrastructure.storage.base import (
    EntityStore,
    EntityT,
    Predicate,
    StoreError,
    check_fields,
)
from classboard.models.common import EntityModel

logger = logging.getLogger(__name__)


class InMemoryEntityStore(EntityStore):
    """Entity store backed by dictionaries."""

    def __init__(self) -> None:
        self._tables: dict[type[EntityModel], dict[str, EntityModel]] = defaultdict(dict)

    async def create(self, record: EntityT) -> EntityT:
        table = self._tables[type(record)]
        if record.id in table:
            raise StoreError(f"{type(record).__name__} {record.id} already exists")

        table[record.id] = record.model_copy(deep=True)
        logger.debug("Created %s %s", type(record).__name__, record.id)
        return record.model_copy(deep=True)

    async def get(self, model: type[EntityT], record_id: str) -> EntityT | None:
        record = self._tables[model].get(record_id)
        if record is None:
            return None
        return record.model_copy(deep=True)

    async def find(
        self,
        model: type[EntityT],
        predicate: Predicate | None = None,
        **filters: Any,
    ) -> list[EntityT]:
        check_fields(model, filters)

        results = []
        for record in self._tables[model].values():
            if any(getattr(record, name) != value for name, value in filters.items()):
                continue
            if predicate is not None and not predicate(record):
                continue
            results.append(record.model_copy(deep=True))
        return results

    async def update(
        self,
        model: type[EntityT],
        record_id: str,
        changes: dict[str, Any],
    ) -> EntityT | None:
        check_fields(model, changes)
        if "id" in changes and changes["id"] != record_id:
            raise StoreError("Record id cannot be changed")

        table = self._tables[model]
        existing = table.get(record_id)
        if existing is None:
            return None

        updated = model.model_validate({**existing.model_dump(), **changes})
        table[record_id] = updated
        logger.debug("Updated %s %s: %s", model.__name__, record_id, sorted(changes))
        return updated.model_copy(deep=True)
