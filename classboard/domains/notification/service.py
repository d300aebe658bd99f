# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Notification service for in-app notification records.

Handles single notifications: creation, the per-user inbox and read
state. One-to-many delivery for a class lives in
``classboard.domains.notification.fanout``.
"""

import logging

from classboard.infrastructure.storage import EntityStore
from classboard.models import Notification, NotificationCreateRequest
from classboard.utils.datetime import newest_first

logger = logging.getLogger(__name__)


class NotificationService:
    """Service for reading and updating a user's notifications.

    Attributes:
        store: Entity store.
    """

    def __init__(self, store: EntityStore) -> None:
        """Initialize the notification service.

        Args:
            store: Entity store holding notification records.
        """
        self.store = store

    async def create_notification(self, request: NotificationCreateRequest) -> Notification:
        """Create an unread notification for one user."""
        notification = await self.store.create(Notification(**request.model_dump()))

        logger.info(
            "Created %s notification %s for user %s",
            notification.type.value,
            notification.id,
            notification.user_id,
        )
        return notification

    async def list_by_user(
        self,
        user_id: str,
        unread_only: bool = False,
        limit: int | None = None,
    ) -> list[Notification]:
        """List a user's notifications, newest first.

        Args:
            user_id: Recipient user ID.
            unread_only: Only return unread notifications.
            limit: Maximum number of notifications to return.
        """
        filters: dict[str, object] = {"user_id": user_id}
        if unread_only:
            filters["is_read"] = False

        notifications = newest_first(
            await self.store.find(Notification, **filters),
            key=lambda n: n.created_at,
        )
        if limit is not None:
            notifications = notifications[:limit]
        return notifications

    async def count_unread(self, user_id: str) -> int:
        """Count a user's unread notifications."""
        return await self.store.count(Notification, user_id=user_id, is_read=False)

    async def mark_read(self, notification_id: str) -> None:
        """Mark a notification as read.

        Idempotent: an already-read notification is left as is and an
        unknown id is ignored.
        """
        notification = await self.store.get(Notification, notification_id)
        if notification is None:
            logger.debug("Notification %s not found, nothing to mark read", notification_id)
            return

        if notification.is_read:
            return

        await self.store.update(Notification, notification_id, {"is_read": True})
        logger.debug("Marked notification %s read", notification_id)
