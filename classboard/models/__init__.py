# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pydantic models for ClassBoard entities and service requests.

Entities (User, Class, Enrollment, Cancellation, Notification, Attendance)
are the records held by the entity store. Request models validate service
inputs before anything is persisted.
"""

from classboard.models.attendance import (
    Attendance,
    AttendanceSummary,
    AttendanceUpdateRequest,
    MarkAttendanceRequest,
)
from classboard.models.cancellation import (
    CancelClassRequest,
    Cancellation,
    CancellationResult,
)
from classboard.models.class_ import Class, ClassCreateRequest, ClassUpdateRequest
from classboard.models.common import (
    AttendanceStatus,
    CancellationStatus,
    EntityModel,
    NotificationType,
    RequestModel,
    UserRole,
    generate_id,
)
from classboard.models.enrollment import Enrollment, EnrollStudentRequest
from classboard.models.notification import Notification, NotificationCreateRequest
from classboard.models.user import User, UserCreateRequest, UserSummary

__all__ = [
    # Common
    "EntityModel",
    "RequestModel",
    "generate_id",
    "UserRole",
    "NotificationType",
    "AttendanceStatus",
    "CancellationStatus",
    # Entities
    "User",
    "Class",
    "Enrollment",
    "Cancellation",
    "Notification",
    "Attendance",
    # Requests
    "UserCreateRequest",
    "ClassCreateRequest",
    "ClassUpdateRequest",
    "EnrollStudentRequest",
    "CancelClassRequest",
    "NotificationCreateRequest",
    "MarkAttendanceRequest",
    "AttendanceUpdateRequest",
    # Results
    "UserSummary",
    "CancellationResult",
    "AttendanceSummary",
]
