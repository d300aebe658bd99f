# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Attendance service for marking and querying student attendance.

Marks are append-only: every call to mark_attendance inserts a new record,
even when the student was already marked for that class and date. Readers
that need one answer per session use the effective view, where the record
with the latest ``marked_at`` wins.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from datetime import date

from classboard.core.config import get_settings
from classboard.infrastructure.storage import EntityStore
from classboard.models import (
    Attendance,
    AttendanceStatus,
    AttendanceSummary,
    AttendanceUpdateRequest,
    MarkAttendanceRequest,
)
from classboard.utils.datetime import newest_first

logger = logging.getLogger(__name__)


class AttendanceServiceError(Exception):
    """Base exception for attendance service errors."""

    pass


class AttendanceNotFoundError(AttendanceServiceError):
    """Raised when attendance record is not found."""

    pass


def calculate_attendance_rate(records: Iterable[Attendance]) -> int:
    """Percentage of records marked present, rounded half up.

    Returns 0 when there are no records.
    """
    records = list(records)
    if not records:
        return 0

    present = sum(1 for r in records if r.status == AttendanceStatus.PRESENT)
    return math.floor(present * 100 / len(records) + 0.5)


def latest_per_session(records: Iterable[Attendance]) -> list[Attendance]:
    """Keep the most recent mark per (class_id, student_id, date).

    Returns the surviving records newest first.
    """
    latest: dict[tuple[str, str, date], Attendance] = {}
    for record in newest_first(records, key=lambda r: r.marked_at):
        latest.setdefault((record.class_id, record.student_id, record.date), record)
    return list(latest.values())


class AttendanceService:
    """Service for attendance records.

    Attributes:
        store: Entity store.
        low_attendance_threshold: Rate below which a student is flagged.
    """

    def __init__(
        self,
        store: EntityStore,
        low_attendance_threshold: int | None = None,
    ) -> None:
        """Initialize attendance service.

        Args:
            store: Entity store holding attendance records.
            low_attendance_threshold: Percent threshold for low attendance;
                defaults to the configured value.
        """
        self.store = store
        if low_attendance_threshold is None:
            low_attendance_threshold = get_settings().attendance.low_attendance_threshold
        self.low_attendance_threshold = low_attendance_threshold

    async def mark_attendance(self, request: MarkAttendanceRequest) -> Attendance:
        """Record an attendance mark.

        Always inserts a new record; earlier marks for the same session are
        kept and superseded by this one in the effective view.
        """
        attendance = await self.store.create(Attendance(**request.model_dump()))

        logger.info(
            "Marked attendance: student=%s, class=%s, date=%s, status=%s",
            attendance.student_id,
            attendance.class_id,
            attendance.date.isoformat(),
            attendance.status.value,
        )
        return attendance

    async def list_by_class_and_date(self, class_id: str, day: date) -> list[Attendance]:
        """List every mark for a class session, oldest first."""
        records = await self.store.find(Attendance, class_id=class_id, date=day)
        return sorted(records, key=lambda r: r.marked_at)

    async def effective_by_class_and_date(self, class_id: str, day: date) -> list[Attendance]:
        """List the authoritative mark per student for a class session."""
        records = await self.store.find(Attendance, class_id=class_id, date=day)
        return latest_per_session(records)

    async def list_by_student(self, student_id: str) -> list[Attendance]:
        """List a student's marks, most recently marked first."""
        records = await self.store.find(Attendance, student_id=student_id)
        return newest_first(records, key=lambda r: r.marked_at)

    async def update_attendance(
        self,
        attendance_id: str,
        request: AttendanceUpdateRequest,
    ) -> Attendance:
        """Apply a partial update to an attendance record.

        Only fields set on the request are changed; ``notes`` may be set to
        None to clear it. Moving a mark to another session or student keeps
        its ``marked_at``, so it competes there by its original time.

        Raises:
            AttendanceNotFoundError: If the record does not exist.
        """
        changes = {
            name: value
            for name, value in request.model_dump(exclude_unset=True).items()
            if value is not None or name == "notes"
        }

        if not changes:
            attendance = await self.store.get(Attendance, attendance_id)
        else:
            attendance = await self.store.update(Attendance, attendance_id, changes)

        if attendance is None:
            raise AttendanceNotFoundError(f"Attendance record {attendance_id} not found")

        if changes:
            logger.info("Updated attendance %s: %s", attendance_id, sorted(changes))
        return attendance

    async def get_student_summary(
        self,
        student_id: str,
        class_id: str | None = None,
        threshold: int | None = None,
    ) -> AttendanceSummary:
        """Summarize a student's attendance over their effective marks.

        A student with no marks has rate 0 and is not flagged as low.

        Args:
            student_id: Student identifier.
            class_id: Restrict to one class.
            threshold: Low-attendance threshold overriding the service default.
        """
        filters: dict[str, object] = {"student_id": student_id}
        if class_id is not None:
            filters["class_id"] = class_id

        records = latest_per_session(await self.store.find(Attendance, **filters))
        threshold = self.low_attendance_threshold if threshold is None else threshold
        rate = calculate_attendance_rate(records)

        counts = {status: 0 for status in AttendanceStatus}
        for record in records:
            counts[record.status] += 1

        return AttendanceSummary(
            student_id=student_id,
            class_id=class_id,
            total=len(records),
            present=counts[AttendanceStatus.PRESENT],
            absent=counts[AttendanceStatus.ABSENT],
            late=counts[AttendanceStatus.LATE],
            excused=counts[AttendanceStatus.EXCUSED],
            rate=rate,
            threshold=threshold,
            is_low=bool(records) and rate < threshold,
        )
