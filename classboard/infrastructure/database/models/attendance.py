# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Attendance table.

Append-only: several rows may exist for one (class_id, student_id, date),
so there is no unique constraint on that tuple.
"""

import datetime as dt

from sqlalchemy import Date, DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from classboard.infrastructure.database.models.base import Base, IdMixin


class AttendanceRecord(IdMixin, Base):
    """Attendance marks."""

    __tablename__ = "attendance"
    __table_args__ = (
        Index("ix_attendance_class_date", "class_id", "date"),
    )

    class_id: Mapped[str] = mapped_column(String(36), nullable=False)
    student_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    teacher_id: Mapped[str] = mapped_column(String(36), nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    marked_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), nullable=False)
