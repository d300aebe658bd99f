# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for Notification service."""

from datetime import datetime, timedelta, timezone

import pytest

from classboard.domains.notification import NotificationService
from classboard.models import Notification, NotificationCreateRequest, NotificationType


@pytest.fixture
def notification_service(store):
    """Create notification service over the in-memory store."""
    return NotificationService(store)


async def _notify(store, user_id: str, title: str, created_at: datetime | None = None):
    data = {
        "user_id": user_id,
        "title": title,
        "message": f"{title} message",
        "type": NotificationType.ANNOUNCEMENT,
    }
    if created_at is not None:
        data["created_at"] = created_at
    return await store.create(Notification(**data))


class TestNotificationServiceCreate:
    """Tests for notification creation."""

    @pytest.mark.asyncio
    async def test_create_is_unread(self, notification_service) -> None:
        notification = await notification_service.create_notification(
            NotificationCreateRequest(
                user_id="student-1",
                title="Welcome",
                message="Welcome to CS 201",
                type=NotificationType.ENROLLMENT,
            )
        )

        assert notification.is_read is False
        assert notification.type == NotificationType.ENROLLMENT


class TestNotificationServiceInbox:
    """Tests for listing and counting."""

    @pytest.mark.asyncio
    async def test_list_newest_first(self, notification_service, store) -> None:
        base = datetime(2024, 3, 12, 9, 0, tzinfo=timezone.utc)
        await _notify(store, "student-1", "old", base)
        await _notify(store, "student-1", "new", base + timedelta(hours=2))
        await _notify(store, "student-1", "middle", base + timedelta(hours=1))
        await _notify(store, "student-2", "other", base + timedelta(hours=3))

        notifications = await notification_service.list_by_user("student-1")

        assert [n.title for n in notifications] == ["new", "middle", "old"]

    @pytest.mark.asyncio
    async def test_list_limit_and_unread_only(self, notification_service, store) -> None:
        base = datetime(2024, 3, 12, 9, 0, tzinfo=timezone.utc)
        first = await _notify(store, "student-1", "first", base)
        await _notify(store, "student-1", "second", base + timedelta(minutes=1))
        await _notify(store, "student-1", "third", base + timedelta(minutes=2))
        await notification_service.mark_read(first.id)

        unread = await notification_service.list_by_user("student-1", unread_only=True)
        latest = await notification_service.list_by_user("student-1", limit=1)

        assert [n.title for n in unread] == ["third", "second"]
        assert [n.title for n in latest] == ["third"]

    @pytest.mark.asyncio
    async def test_count_unread(self, notification_service, store) -> None:
        first = await _notify(store, "student-1", "first")
        await _notify(store, "student-1", "second")

        await notification_service.mark_read(first.id)

        assert await notification_service.count_unread("student-1") == 1
        assert await notification_service.count_unread("student-2") == 0


class TestNotificationServiceMarkRead:
    """Tests for mark_read."""

    @pytest.mark.asyncio
    async def test_mark_read_is_idempotent(self, notification_service, store) -> None:
        notification = await _notify(store, "student-1", "Cancelled")

        await notification_service.mark_read(notification.id)
        await notification_service.mark_read(notification.id)

        stored = await store.get(Notification, notification.id)
        assert stored.is_read is True

    @pytest.mark.asyncio
    async def test_mark_read_unknown_id(self, notification_service, store) -> None:
        """Test an unknown id is ignored without touching other records."""
        notification = await _notify(store, "student-1", "Cancelled")

        await notification_service.mark_read("missing")

        assert (await store.get(Notification, notification.id)).is_read is False
