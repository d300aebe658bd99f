# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""SQLAlchemy-backed entity store.

Maps each entity model onto its ORM table and converts rows back into
entity models. Every write commits its own transaction.

Example:
    async with get_session() as session:
        store = SQLEntityStore(session)
        service = AttendanceService(store)
"""

import logging
from enum import Enum
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from classboard.infrastructure.database.models import (
    AttendanceRecord,
    Base,
    CancellationRecord,
    ClassRecord,
    EnrollmentRecord,
    NotificationRecord,
    UserRecord,
)
from classboard.infrastructure.storage.base import (
    EntityStore,
    EntityT,
    Predicate,
    StoreError,
    check_fields,
)
from classboard.models import (
    Attendance,
    Cancellation,
    Class,
    EntityModel,
    Enrollment,
    Notification,
    User,
)

logger = logging.getLogger(__name__)

TABLES: dict[type[EntityModel], type[Base]] = {
    User: UserRecord,
    Class: ClassRecord,
    Enrollment: EnrollmentRecord,
    Cancellation: CancellationRecord,
    Notification: NotificationRecord,
    Attendance: AttendanceRecord,
}


def _column_value(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


class SQLEntityStore(EntityStore):
    """Entity store over an async SQLAlchemy session.

    Attributes:
        db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        """Initialize the store.

        Args:
            db: Async database session.
        """
        self.db = db

    def _table(self, model: type[EntityModel]) -> type[Base]:
        try:
            return TABLES[model]
        except KeyError:
            raise StoreError(f"No table mapped for {model.__name__}") from None

    async def create(self, record: EntityT) -> EntityT:
        table = self._table(type(record))
        row = table(**{k: _column_value(v) for k, v in record.model_dump().items()})

        try:
            self.db.add(row)
            await self.db.commit()
            await self.db.refresh(row)
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StoreError(f"Failed to create {type(record).__name__}", e) from e

        return type(record).model_validate(row)

    async def get(self, model: type[EntityT], record_id: str) -> EntityT | None:
        row = await self._get_row(model, record_id)
        if row is None:
            return None
        return model.model_validate(row)

    async def find(
        self,
        model: type[EntityT],
        predicate: Predicate | None = None,
        **filters: Any,
    ) -> list[EntityT]:
        check_fields(model, filters)
        table = self._table(model)

        query = select(table)
        conditions = [
            getattr(table, name) == _column_value(value) for name, value in filters.items()
        ]
        if conditions:
            query = query.where(*conditions)

        try:
            result = await self.db.execute(query)
            rows = result.scalars().all()
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to list {model.__name__}", e) from e

        records = [model.model_validate(row) for row in rows]
        if predicate is not None:
            records = [record for record in records if predicate(record)]
        return records

    async def update(
        self,
        model: type[EntityT],
        record_id: str,
        changes: dict[str, Any],
    ) -> EntityT | None:
        check_fields(model, changes)
        if "id" in changes and changes["id"] != record_id:
            raise StoreError("Record id cannot be changed")

        row = await self._get_row(model, record_id)
        if row is None:
            return None

        # Validate the merged record so entity invariants hold after the write
        merged = model.model_validate({**model.model_validate(row).model_dump(), **changes})
        for name in changes:
            setattr(row, name, _column_value(getattr(merged, name)))

        try:
            await self.db.commit()
            await self.db.refresh(row)
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StoreError(f"Failed to update {model.__name__} {record_id}", e) from e

        logger.debug("Updated %s %s: %s", model.__name__, record_id, sorted(changes))
        return model.model_validate(row)

    async def _get_row(self, model: type[EntityModel], record_id: str) -> Base | None:
        table = self._table(model)
        query = select(table).where(table.id == record_id)

        try:
            result = await self.db.execute(query)
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to load {model.__name__} {record_id}", e) from e

        return result.scalar_one_or_none()
