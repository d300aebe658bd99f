# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for notification fanout."""

import pytest

from classboard.domains.notification import FanoutResult, NotificationFanout
from classboard.infrastructure.storage import InMemoryEntityStore, StoreError
from classboard.models import Enrollment, Notification, NotificationType


class FailingNotificationStore(InMemoryEntityStore):
    """In-memory store that fails to create notifications for some users."""

    def __init__(self, failing_users: set[str]) -> None:
        super().__init__()
        self.failing_users = failing_users

    async def create(self, record):
        if isinstance(record, Notification) and record.user_id in self.failing_users:
            raise StoreError(f"Disk full while notifying {record.user_id}")
        return await super().create(record)


async def _enroll(store, class_id: str, *student_ids: str) -> None:
    for student_id in student_ids:
        await store.create(Enrollment(student_id=student_id, class_id=class_id))


class TestFanOut:
    """Tests for NotificationFanout.fan_out."""

    @pytest.mark.asyncio
    async def test_one_notification_per_student(self, store) -> None:
        await _enroll(store, "class-1", "student-1", "student-2", "student-3")
        await _enroll(store, "class-2", "student-4")
        fanout = NotificationFanout(store)

        result = await fanout.fan_out(
            class_id="class-1",
            title="Class Cancelled",
            message="CS 201 - Data Structures has been cancelled. Reason: Sick",
            notification_type=NotificationType.CANCELLATION,
        )

        assert result.recipients == 3
        assert result.created == 3
        assert result.is_complete is True
        notifications = await store.find(Notification)
        assert sorted(n.user_id for n in notifications) == ["student-1", "student-2", "student-3"]
        assert all(not n.is_read for n in notifications)
        assert all(n.type == NotificationType.CANCELLATION for n in notifications)

    @pytest.mark.asyncio
    async def test_duplicate_enrollments_notify_once(self, store) -> None:
        await _enroll(store, "class-1", "student-1", "student-1")

        result = await NotificationFanout(store).fan_out(
            "class-1", "Title", "Message", NotificationType.ANNOUNCEMENT
        )

        assert result.recipients == 1
        assert await store.count(Notification, user_id="student-1") == 1

    @pytest.mark.asyncio
    async def test_no_enrollments(self, store) -> None:
        result = await NotificationFanout(store).fan_out(
            "class-1", "Title", "Message", NotificationType.ANNOUNCEMENT
        )

        assert result.recipients == 0
        assert result.is_complete is True
        assert await store.count(Notification) == 0

    @pytest.mark.asyncio
    async def test_not_deduplicated_across_calls(self, store) -> None:
        """Test calling twice for the same event notifies everyone twice."""
        await _enroll(store, "class-1", "student-1", "student-2")
        fanout = NotificationFanout(store)

        await fanout.fan_out("class-1", "Title", "Message", NotificationType.CANCELLATION)
        await fanout.fan_out("class-1", "Title", "Message", NotificationType.CANCELLATION)

        assert await store.count(Notification) == 4

    @pytest.mark.asyncio
    async def test_partial_failure_continues(self) -> None:
        """Test one failing student does not stop or undo the others."""
        store = FailingNotificationStore(failing_users={"student-2"})
        await _enroll(store, "class-1", "student-1", "student-2", "student-3")

        result = await NotificationFanout(store).fan_out(
            "class-1", "Title", "Message", NotificationType.CANCELLATION
        )

        assert result.recipients == 3
        assert result.created == 2
        assert result.is_complete is False
        assert len(result.errors) == 1
        assert "student-2" in result.errors[0]
        notified = sorted(n.user_id for n in await store.find(Notification))
        assert notified == ["student-1", "student-3"]


class TestFanoutResult:
    """Tests for FanoutResult."""

    def test_to_dict(self) -> None:
        result = FanoutResult(class_id="class-1", recipients=2, notification_ids=["n1"])

        data = result.to_dict()

        assert data["created"] == 1
        assert data["recipients"] == 2
        assert data["errors"] == []

    def test_to_dict_counts_already_notified(self) -> None:
        result = FanoutResult(
            class_id="class-1", recipients=3, notification_ids=["n1"], already_notified=2
        )

        assert result.to_dict()["already_notified"] == 2
        assert result.delivered == 3
        assert result.is_complete is True
