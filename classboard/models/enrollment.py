# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Enrollment models."""

from datetime import datetime

from pydantic import Field

from classboard.models.common import EntityModel, RequestModel
from classboard.utils.datetime import utc_now


class Enrollment(EntityModel):
    """Link between one student and one class."""

    student_id: str
    class_id: str
    enrolled_at: datetime = Field(default_factory=utc_now)


class EnrollStudentRequest(RequestModel):
    """Request to enroll a student in a class."""

    student_id: str = Field(min_length=1)
    class_id: str = Field(min_length=1)
