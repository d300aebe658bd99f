# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Dashboard aggregation service.

Dashboards are read-only summaries computed on demand from the entity
store; nothing here is persisted.

Usage:
    from classboard.domains.dashboard import DashboardService

    service = DashboardService(store)

    # Teacher dashboard: enrollment per class, active classes, and
    # cancellations in the last 7 days
    dashboard = await service.teacher_dashboard(teacher_id="teacher-1")

    # Student dashboard: schedule, notifications and attendance
    dashboard = await service.student_dashboard(student_id="student-1")
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any

from classboard.core.config import get_settings
from classboard.core.config.settings import DashboardSettings
from classboard.domains.attendance import AttendanceService
from classboard.domains.class_ import ClassService
from classboard.domains.notification import NotificationService
from classboard.infrastructure.storage import EntityStore
from classboard.models import (
    AttendanceSummary,
    Cancellation,
    Class,
    Enrollment,
    Notification,
)
from classboard.utils.datetime import days_before, ensure_utc, utc_now

logger = logging.getLogger(__name__)


@dataclass
class ClassEnrollmentCount:
    """Number of students enrolled in one class."""

    class_id: str
    class_name: str
    class_code: str
    enrollment_count: int = 0


@dataclass
class TeacherDashboard:
    """Complete teacher dashboard data.

    Attributes:
        teacher_id: Teacher the dashboard belongs to.
        class_enrollments: Enrollment count per class, in schedule order.
        active_classes: Number of the teacher's classes that are active.
        week_cancellations: Cancellations recorded in [window_start, generated_at).
        window_start: Start of the cancellation window.
        generated_at: End of the cancellation window.
    """

    teacher_id: str
    class_enrollments: list[ClassEnrollmentCount] = field(default_factory=list)
    active_classes: int = 0
    week_cancellations: int = 0
    window_start: datetime | None = None
    generated_at: datetime = field(default_factory=utc_now)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for API response."""
        return {
            "teacher_id": self.teacher_id,
            "class_enrollments": [
                {
                    "class_id": ce.class_id,
                    "class_name": ce.class_name,
                    "class_code": ce.class_code,
                    "enrollment_count": ce.enrollment_count,
                }
                for ce in self.class_enrollments
            ],
            "active_classes": self.active_classes,
            "week_cancellations": self.week_cancellations,
            "window_start": self.window_start.isoformat() if self.window_start else None,
            "generated_at": self.generated_at.isoformat(),
        }


@dataclass
class StudentDashboard:
    """Complete student dashboard data."""

    student_id: str
    attendance: AttendanceSummary
    classes: list[Class] = field(default_factory=list)
    unread_notifications: int = 0
    recent_notifications: list[Notification] = field(default_factory=list)
    generated_at: datetime = field(default_factory=utc_now)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for API response."""
        return {
            "student_id": self.student_id,
            "classes": [c.model_dump(mode="json") for c in self.classes],
            "unread_notifications": self.unread_notifications,
            "recent_notifications": [
                n.model_dump(mode="json") for n in self.recent_notifications
            ],
            "attendance": self.attendance.model_dump(mode="json"),
            "generated_at": self.generated_at.isoformat(),
        }


class DashboardService:
    """Service computing teacher and student dashboards.

    Attributes:
        store: Entity store.
    """

    def __init__(
        self,
        store: EntityStore,
        settings: DashboardSettings | None = None,
        attendance_service: AttendanceService | None = None,
    ) -> None:
        """Initialize the dashboard service.

        Args:
            store: Entity store to aggregate from.
            settings: Dashboard settings; defaults to the configured ones.
            attendance_service: Used for student attendance summaries.
        """
        self.store = store
        self._settings = settings or get_settings().dashboard
        self._classes = ClassService(store)
        self._notifications = NotificationService(store)
        self._attendance = attendance_service or AttendanceService(store)

    async def teacher_dashboard(
        self,
        teacher_id: str,
        now: datetime | None = None,
        window: timedelta | None = None,
    ) -> TeacherDashboard:
        """Build the dashboard for a teacher.

        Enrollment is counted with one query per class. Cancellations count
        toward ``week_cancellations`` when ``cancelled_at`` falls in
        ``[now - window, now)``.

        Args:
            teacher_id: Teacher identifier.
            now: End of the cancellation window; defaults to the current time.
            window: Window length; defaults to the configured number of days.

        Returns:
            TeacherDashboard, empty when the teacher has no classes.
        """
        end = ensure_utc(now) if now is not None else utc_now()
        if window is None:
            start = days_before(end, self._settings.cancellation_window_days)
        else:
            start = end - window

        classes = await self._classes.list_by_teacher(teacher_id)

        class_enrollments = []
        for class_ in classes:
            count = await self.store.count(Enrollment, class_id=class_.id)
            class_enrollments.append(
                ClassEnrollmentCount(
                    class_id=class_.id,
                    class_name=class_.name,
                    class_code=class_.code,
                    enrollment_count=count,
                )
            )

        recent_cancellations = await self.store.find(
            Cancellation,
            lambda c: start <= ensure_utc(c.cancelled_at) < end,
            teacher_id=teacher_id,
        )

        dashboard = TeacherDashboard(
            teacher_id=teacher_id,
            class_enrollments=class_enrollments,
            active_classes=sum(1 for c in classes if c.is_active),
            week_cancellations=len(recent_cancellations),
            window_start=start,
            generated_at=end,
        )

        logger.debug(
            "Teacher dashboard for %s: %d classes, %d active, %d recent cancellations",
            teacher_id,
            len(classes),
            dashboard.active_classes,
            dashboard.week_cancellations,
        )
        return dashboard

    async def student_dashboard(
        self,
        student_id: str,
        now: datetime | None = None,
    ) -> StudentDashboard:
        """Build the dashboard for a student.

        Includes the student's classes in schedule order, unread
        notification count, the most recent notifications and the
        attendance summary. ``now`` only stamps ``generated_at``.
        """
        classes = await self._classes.list_by_student(student_id)
        unread = await self._notifications.count_unread(student_id)
        recent = await self._notifications.list_by_user(
            student_id,
            limit=self._settings.recent_notifications_limit,
        )
        attendance = await self._attendance.get_student_summary(student_id)

        return StudentDashboard(
            student_id=student_id,
            attendance=attendance,
            classes=classes,
            unread_notifications=unread,
            recent_notifications=recent,
            generated_at=ensure_utc(now) if now is not None else utc_now(),
        )
