# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Dashboard domain package.

Derived, read-only aggregates for teacher and student dashboards.
"""

from classboard.domains.dashboard.service import (
    ClassEnrollmentCount,
    DashboardService,
    StudentDashboard,
    TeacherDashboard,
)

__all__ = [
    "DashboardService",
    "TeacherDashboard",
    "StudentDashboard",
    "ClassEnrollmentCount",
]
