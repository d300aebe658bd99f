# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Attendance domain package.

This package provides attendance functionality including:
- Append-only attendance marks with latest-wins reads
- Per-session and per-student queries
- Attendance rate and low-attendance flagging
"""

from classboard.domains.attendance.service import (
    AttendanceNotFoundError,
    AttendanceService,
    AttendanceServiceError,
    calculate_attendance_rate,
    latest_per_session,
)

__all__ = [
    "AttendanceService",
    "AttendanceServiceError",
    "AttendanceNotFoundError",
    "calculate_attendance_rate",
    "latest_per_session",
]
