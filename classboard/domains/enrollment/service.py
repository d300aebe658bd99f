# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Enrollment service for managing student class enrollments.

This module provides the EnrollmentService class for:
- Student enrollment in classes, one enrollment per (student, class)
- Listing enrollments by class or by student
"""

from __future__ import annotations

import logging

from classboard.infrastructure.storage import EntityStore
from classboard.models import Class, Enrollment, EnrollStudentRequest, User, UserRole

logger = logging.getLogger(__name__)


class EnrollmentServiceError(Exception):
    """Base exception for enrollment service errors."""

    pass


class ClassNotFoundError(EnrollmentServiceError):
    """Raised when class is not found."""

    pass


class StudentNotFoundError(EnrollmentServiceError):
    """Raised when student is not found."""

    pass


class AlreadyEnrolledError(EnrollmentServiceError):
    """Raised when student is already enrolled in class."""

    pass


class InvalidStudentRoleError(EnrollmentServiceError):
    """Raised when user is not a student."""

    pass


class EnrollmentService:
    """Service for managing student enrollments.

    Attributes:
        store: Entity store.
    """

    def __init__(self, store: EntityStore) -> None:
        """Initialize enrollment service.

        Args:
            store: Entity store holding enrollment records.
        """
        self.store = store

    async def enroll_student(self, request: EnrollStudentRequest) -> Enrollment:
        """Enroll a student in a class.

        Args:
            request: Enrollment request data.

        Returns:
            The new enrollment.

        Raises:
            ClassNotFoundError: If class not found.
            StudentNotFoundError: If student not found.
            InvalidStudentRoleError: If user is not a student.
            AlreadyEnrolledError: If student already enrolled.
        """
        if await self.store.get(Class, request.class_id) is None:
            raise ClassNotFoundError(f"Class {request.class_id} not found")

        student = await self.store.get(User, request.student_id)
        if student is None:
            raise StudentNotFoundError(f"Student {request.student_id} not found")
        if student.role != UserRole.STUDENT:
            raise InvalidStudentRoleError(f"User {request.student_id} is not a student")

        existing = await self.store.find(
            Enrollment,
            student_id=request.student_id,
            class_id=request.class_id,
        )
        if existing:
            raise AlreadyEnrolledError("Student is already enrolled in this class")

        enrollment = await self.store.create(
            Enrollment(student_id=request.student_id, class_id=request.class_id)
        )

        logger.info(
            "Enrolled student: student=%s, class=%s",
            request.student_id,
            request.class_id,
        )
        return enrollment

    async def list_by_class(self, class_id: str) -> list[Enrollment]:
        """List enrollments for a class, earliest first."""
        enrollments = await self.store.find(Enrollment, class_id=class_id)
        return sorted(enrollments, key=lambda e: e.enrolled_at)

    async def list_by_student(self, student_id: str) -> list[Enrollment]:
        """List a student's enrollments, earliest first."""
        enrollments = await self.store.find(Enrollment, student_id=student_id)
        return sorted(enrollments, key=lambda e: e.enrolled_at)

    async def count_by_class(self, class_id: str) -> int:
        """Count students enrolled in a class."""
        return await self.store.count(Enrollment, class_id=class_id)
