# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Class service for managing scheduled classes.

This module provides the ClassService class for:
- Class creation and partial updates
- Listing a teacher's or a student's classes
- Finding the classes that meet on a given day
"""

from __future__ import annotations

import logging
from datetime import date

from classboard.infrastructure.storage import EntityStore
from classboard.models import Class, ClassCreateRequest, ClassUpdateRequest, Enrollment
from classboard.utils.datetime import schedule_day_of_week

logger = logging.getLogger(__name__)


class ClassServiceError(Exception):
    """Base exception for class service errors."""

    pass


class ClassNotFoundError(ClassServiceError):
    """Raised when class is not found."""

    pass


def _schedule_order(class_: Class) -> tuple[int, str]:
    return class_.day_of_week, class_.start_time


class ClassService:
    """Service for managing classes.

    Attributes:
        store: Entity store.
    """

    def __init__(self, store: EntityStore) -> None:
        """Initialize class service.

        Args:
            store: Entity store holding class records.
        """
        self.store = store

    async def create_class(self, request: ClassCreateRequest) -> Class:
        """Create a new class.

        Args:
            request: Class creation data.

        Returns:
            Created class.
        """
        class_ = await self.store.create(Class(**request.model_dump()))

        logger.info(
            "Created class: %s (%s) for teacher %s",
            class_.code,
            class_.id,
            class_.teacher_id,
        )
        return class_

    async def get_class(self, class_id: str) -> Class:
        """Get class by ID.

        Raises:
            ClassNotFoundError: If class not found.
        """
        class_ = await self.store.get(Class, class_id)
        if class_ is None:
            raise ClassNotFoundError(f"Class {class_id} not found")
        return class_

    async def list_by_teacher(
        self,
        teacher_id: str,
        is_active: bool | None = None,
    ) -> list[Class]:
        """List a teacher's classes in weekly schedule order.

        Args:
            teacher_id: Teacher identifier.
            is_active: Optional active-status filter.
        """
        filters: dict[str, object] = {"teacher_id": teacher_id}
        if is_active is not None:
            filters["is_active"] = is_active

        classes = await self.store.find(Class, **filters)
        return sorted(classes, key=_schedule_order)

    async def list_by_student(self, student_id: str) -> list[Class]:
        """List the classes a student is enrolled in, in weekly schedule order."""
        enrollments = await self.store.find(Enrollment, student_id=student_id)

        classes = []
        for class_id in dict.fromkeys(e.class_id for e in enrollments):
            class_ = await self.store.get(Class, class_id)
            if class_ is None:
                logger.warning(
                    "Enrollment for student %s references missing class %s",
                    student_id,
                    class_id,
                )
                continue
            classes.append(class_)

        return sorted(classes, key=_schedule_order)

    async def list_for_day(self, teacher_id: str, day: date) -> list[Class]:
        """List a teacher's active classes that meet on ``day``."""
        weekday = schedule_day_of_week(day)
        classes = await self.store.find(
            Class,
            teacher_id=teacher_id,
            is_active=True,
            day_of_week=weekday,
        )
        return sorted(classes, key=_schedule_order)

    async def update_class(
        self,
        class_id: str,
        request: ClassUpdateRequest,
    ) -> Class:
        """Update a class.

        Only fields set on the request are applied. The merged record must
        still have start_time before end_time.

        Raises:
            ClassNotFoundError: If class not found.
        """
        changes = request.model_dump(exclude_unset=True, exclude_none=True)
        if not changes:
            return await self.get_class(class_id)

        class_ = await self.store.update(Class, class_id, changes)
        if class_ is None:
            raise ClassNotFoundError(f"Class {class_id} not found")

        logger.info("Updated class %s: %s", class_id, sorted(changes))
        return class_
