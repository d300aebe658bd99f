# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for Attendance service."""

from datetime import date, datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from classboard.domains.attendance import (
    AttendanceNotFoundError,
    AttendanceService,
    calculate_attendance_rate,
    latest_per_session,
)
from classboard.models import (
    Attendance,
    AttendanceStatus,
    AttendanceUpdateRequest,
    MarkAttendanceRequest,
)

SESSION_DATE = date(2024, 3, 12)
BASE_TIME = datetime(2024, 3, 12, 9, 5, tzinfo=timezone.utc)


@pytest.fixture
def attendance_service(store):
    """Create attendance service with a 75 percent threshold."""
    return AttendanceService(store, low_attendance_threshold=75)


def _mark(status: AttendanceStatus, **overrides) -> MarkAttendanceRequest:
    data = {
        "class_id": "class-1",
        "student_id": "student-1",
        "teacher_id": "teacher-1",
        "date": SESSION_DATE,
        "status": status,
    }
    data.update(overrides)
    return MarkAttendanceRequest(**data)


def _record(status: AttendanceStatus, minutes: int = 0, **overrides) -> Attendance:
    data = {
        "class_id": "class-1",
        "student_id": "student-1",
        "teacher_id": "teacher-1",
        "date": SESSION_DATE,
        "status": status,
        "marked_at": BASE_TIME + timedelta(minutes=minutes),
    }
    data.update(overrides)
    return Attendance(**data)


class TestMarkAttendance:
    """Tests for marking and listing attendance."""

    @pytest.mark.asyncio
    async def test_mark_then_list_by_class_and_date(self, attendance_service) -> None:
        record = await attendance_service.mark_attendance(_mark(AttendanceStatus.PRESENT))

        records = await attendance_service.list_by_class_and_date("class-1", SESSION_DATE)

        assert records == [record]

    @pytest.mark.asyncio
    async def test_other_sessions_excluded(self, attendance_service) -> None:
        await attendance_service.mark_attendance(_mark(AttendanceStatus.PRESENT))
        await attendance_service.mark_attendance(
            _mark(AttendanceStatus.PRESENT, date=date(2024, 3, 19))
        )
        await attendance_service.mark_attendance(
            _mark(AttendanceStatus.PRESENT, class_id="class-2")
        )

        records = await attendance_service.list_by_class_and_date("class-1", SESSION_DATE)

        assert len(records) == 1

    @pytest.mark.asyncio
    async def test_empty_session(self, attendance_service) -> None:
        assert await attendance_service.list_by_class_and_date("class-1", SESSION_DATE) == []

    def test_invalid_status_rejected(self) -> None:
        with pytest.raises(ValidationError):
            _mark("sleeping")  # type: ignore[arg-type]

    @pytest.mark.asyncio
    async def test_remarking_appends(self, attendance_service, store) -> None:
        """Test marking the same session twice keeps both records."""
        await attendance_service.mark_attendance(_mark(AttendanceStatus.ABSENT))
        await attendance_service.mark_attendance(_mark(AttendanceStatus.PRESENT))

        assert await store.count(Attendance, student_id="student-1") == 2


class TestEffectiveAttendance:
    """Tests for the latest-mark-wins view."""

    @pytest.mark.asyncio
    async def test_latest_mark_wins(self, attendance_service, store) -> None:
        await store.create(_record(AttendanceStatus.ABSENT, minutes=0))
        await store.create(_record(AttendanceStatus.PRESENT, minutes=10))
        await store.create(_record(AttendanceStatus.LATE, minutes=5))
        await store.create(_record(AttendanceStatus.PRESENT, student_id="student-2"))

        effective = await attendance_service.effective_by_class_and_date("class-1", SESSION_DATE)

        by_student = {r.student_id: r.status for r in effective}
        assert by_student == {
            "student-1": AttendanceStatus.PRESENT,
            "student-2": AttendanceStatus.PRESENT,
        }

    def test_latest_per_session_keys(self) -> None:
        """Test records for different dates are kept separately."""
        records = [
            _record(AttendanceStatus.ABSENT, minutes=0),
            _record(AttendanceStatus.PRESENT, minutes=0, date=date(2024, 3, 19)),
        ]

        assert len(latest_per_session(records)) == 2


class TestListByStudent:
    """Tests for list_by_student."""

    @pytest.mark.asyncio
    async def test_newest_first(self, attendance_service, store) -> None:
        older = await store.create(_record(AttendanceStatus.PRESENT, minutes=0))
        newer = await store.create(
            _record(AttendanceStatus.ABSENT, minutes=60 * 24 * 7, date=date(2024, 3, 19))
        )
        await store.create(_record(AttendanceStatus.PRESENT, student_id="student-2"))

        records = await attendance_service.list_by_student("student-1")

        assert [r.id for r in records] == [newer.id, older.id]

    @pytest.mark.asyncio
    async def test_unknown_student(self, attendance_service) -> None:
        assert await attendance_service.list_by_student("nobody") == []


class TestUpdateAttendance:
    """Tests for update_attendance."""

    @pytest.mark.asyncio
    async def test_update_status(self, attendance_service) -> None:
        record = await attendance_service.mark_attendance(_mark(AttendanceStatus.ABSENT))

        updated = await attendance_service.update_attendance(
            record.id, AttendanceUpdateRequest(status=AttendanceStatus.EXCUSED, notes="Doctor's note")
        )

        assert updated.status == AttendanceStatus.EXCUSED
        assert updated.notes == "Doctor's note"
        assert updated.marked_at == record.marked_at

    @pytest.mark.asyncio
    async def test_clear_notes(self, attendance_service) -> None:
        record = await attendance_service.mark_attendance(
            _mark(AttendanceStatus.LATE, notes="Bus delay")
        )

        updated = await attendance_service.update_attendance(
            record.id, AttendanceUpdateRequest(notes=None)
        )

        assert updated.notes is None
        assert updated.status == AttendanceStatus.LATE

    @pytest.mark.asyncio
    async def test_move_to_other_session(self, attendance_service) -> None:
        """Test correcting the date moves the mark to the other session's listing."""
        record = await attendance_service.mark_attendance(_mark(AttendanceStatus.PRESENT))
        next_week = SESSION_DATE + timedelta(days=7)

        updated = await attendance_service.update_attendance(
            record.id, AttendanceUpdateRequest(date=next_week, teacher_id="teacher-2")
        )

        assert updated.date == next_week
        assert updated.teacher_id == "teacher-2"
        assert updated.marked_at == record.marked_at
        assert await attendance_service.list_by_class_and_date("class-1", SESSION_DATE) == []
        assert [a.id for a in await attendance_service.list_by_class_and_date("class-1", next_week)] == [
            record.id
        ]

    @pytest.mark.asyncio
    async def test_none_keeps_required_fields(self, attendance_service) -> None:
        record = await attendance_service.mark_attendance(_mark(AttendanceStatus.LATE))

        updated = await attendance_service.update_attendance(
            record.id, AttendanceUpdateRequest(date=None, student_id=None, notes="Bus delay")
        )

        assert updated.date == SESSION_DATE
        assert updated.student_id == "student-1"
        assert updated.notes == "Bus delay"

    def test_blank_ids_rejected(self) -> None:
        with pytest.raises(ValidationError):
            AttendanceUpdateRequest(class_id="")

    @pytest.mark.asyncio
    async def test_empty_update_returns_record(self, attendance_service) -> None:
        record = await attendance_service.mark_attendance(_mark(AttendanceStatus.PRESENT))

        assert await attendance_service.update_attendance(record.id, AttendanceUpdateRequest()) == record

    @pytest.mark.asyncio
    async def test_update_not_found_leaves_store(self, attendance_service, store) -> None:
        record = await attendance_service.mark_attendance(_mark(AttendanceStatus.PRESENT))

        with pytest.raises(AttendanceNotFoundError):
            await attendance_service.update_attendance(
                "missing", AttendanceUpdateRequest(status=AttendanceStatus.ABSENT)
            )

        assert await store.find(Attendance) == [record]


class TestAttendanceRate:
    """Tests for rate calculation and summaries."""

    def test_zero_records(self) -> None:
        assert calculate_attendance_rate([]) == 0

    def test_rounds_half_up(self) -> None:
        """Test 1 of 8 present (12.5 percent) rounds to 13."""
        records = [_record(AttendanceStatus.PRESENT)] + [
            _record(AttendanceStatus.ABSENT) for _ in range(7)
        ]

        assert calculate_attendance_rate(records) == 13

    def test_two_of_three(self) -> None:
        records = [
            _record(AttendanceStatus.PRESENT),
            _record(AttendanceStatus.PRESENT),
            _record(AttendanceStatus.LATE),
        ]

        assert calculate_attendance_rate(records) == 67

    @pytest.mark.asyncio
    async def test_summary_flags_low_attendance(self, attendance_service, store) -> None:
        for day, status in enumerate(
            [AttendanceStatus.PRESENT, AttendanceStatus.ABSENT, AttendanceStatus.LATE, AttendanceStatus.PRESENT]
        ):
            await store.create(_record(status, date=date(2024, 3, 1 + day)))

        summary = await attendance_service.get_student_summary("student-1")

        assert summary.total == 4
        assert summary.present == 2
        assert summary.absent == 1
        assert summary.late == 1
        assert summary.rate == 50
        assert summary.is_low is True

    @pytest.mark.asyncio
    async def test_summary_uses_latest_marks(self, attendance_service, store) -> None:
        """Test a corrected mark replaces the earlier one in the summary."""
        await store.create(_record(AttendanceStatus.ABSENT, minutes=0))
        await store.create(_record(AttendanceStatus.PRESENT, minutes=5))

        summary = await attendance_service.get_student_summary("student-1")

        assert summary.total == 1
        assert summary.rate == 100
        assert summary.is_low is False

    @pytest.mark.asyncio
    async def test_summary_without_records(self, attendance_service) -> None:
        summary = await attendance_service.get_student_summary("student-1")

        assert summary.total == 0
        assert summary.rate == 0
        assert summary.is_low is False
        assert summary.threshold == 75

    @pytest.mark.asyncio
    async def test_summary_threshold_override(self, attendance_service, store) -> None:
        await store.create(_record(AttendanceStatus.PRESENT, date=date(2024, 3, 1)))
        await store.create(_record(AttendanceStatus.ABSENT, date=date(2024, 3, 2)))

        summary = await attendance_service.get_student_summary(
            "student-1", class_id="class-1", threshold=50
        )

        assert summary.rate == 50
        assert summary.is_low is False
