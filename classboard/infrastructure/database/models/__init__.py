# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""SQLAlchemy ORM tables backing the SQL entity store."""

from classboard.infrastructure.database.models.attendance import AttendanceRecord
from classboard.infrastructure.database.models.base import Base, IdMixin
from classboard.infrastructure.database.models.cancellation import CancellationRecord
from classboard.infrastructure.database.models.notification import NotificationRecord
from classboard.infrastructure.database.models.school import ClassRecord, EnrollmentRecord
from classboard.infrastructure.database.models.user import UserRecord

__all__ = [
    "Base",
    "IdMixin",
    "UserRecord",
    "ClassRecord",
    "EnrollmentRecord",
    "CancellationRecord",
    "NotificationRecord",
    "AttendanceRecord",
]
