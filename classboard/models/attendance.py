# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Attendance models."""

import datetime as dt
from datetime import date, datetime

from pydantic import BaseModel, Field

from classboard.models.common import AttendanceStatus, EntityModel, RequestModel
from classboard.utils.datetime import utc_now


class Attendance(EntityModel):
    """One attendance mark for a student in a class session.

    Marks are append-only; when several exist for the same
    (class_id, student_id, date) the latest ``marked_at`` is authoritative.
    """

    class_id: str
    student_id: str
    teacher_id: str
    date: date
    status: AttendanceStatus
    notes: str | None = None
    marked_at: datetime = Field(default_factory=utc_now)


class MarkAttendanceRequest(RequestModel):
    """Request to mark a student's attendance."""

    class_id: str = Field(min_length=1)
    student_id: str = Field(min_length=1)
    teacher_id: str = Field(min_length=1)
    date: date
    status: AttendanceStatus
    notes: str | None = None


class AttendanceUpdateRequest(RequestModel):
    """Partial update of an attendance record.

    Any field of a mark except its id and ``marked_at`` may be corrected.
    Only ``notes`` can be cleared; None for any other field means unchanged.
    """

    class_id: str | None = Field(default=None, min_length=1)
    student_id: str | None = Field(default=None, min_length=1)
    teacher_id: str | None = Field(default=None, min_length=1)
    date: dt.date | None = None
    status: AttendanceStatus | None = None
    notes: str | None = None


class AttendanceSummary(BaseModel):
    """Attendance totals for one student."""

    student_id: str
    class_id: str | None = None
    total: int = 0
    present: int = 0
    absent: int = 0
    late: int = 0
    excused: int = 0
    rate: int = 0
    threshold: int
    is_low: bool = False
