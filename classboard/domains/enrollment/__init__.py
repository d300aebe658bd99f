# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Enrollment domain package.

This package provides student enrollment management functionality including:
- Student enrollment in classes
- Enrollment listings per class and per student
"""

from classboard.domains.enrollment.service import (
    AlreadyEnrolledError,
    ClassNotFoundError,
    EnrollmentService,
    EnrollmentServiceError,
    InvalidStudentRoleError,
    StudentNotFoundError,
)

__all__ = [
    "EnrollmentService",
    "EnrollmentServiceError",
    "ClassNotFoundError",
    "StudentNotFoundError",
    "AlreadyEnrolledError",
    "InvalidStudentRoleError",
]
