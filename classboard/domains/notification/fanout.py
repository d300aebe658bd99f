# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Notification fanout to the students of a class.

Fanout reads the class's enrollments once and creates one notification
per distinct enrolled student. The enrollment list is a snapshot taken at
call time: students who enroll after it completes are not notified by it.

Without a ``cancellation_id`` fanout does not deduplicate, and calling it
twice notifies everyone twice. With one, every notification is tagged
with the id and students who already hold a notification for it are
skipped, so an interrupted fanout can be resumed.

A failure to create one notification is logged and recorded on the
result; notifications already created stay in place and the remaining
students are still processed.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from classboard.infrastructure.storage import EntityStore, StoreError
from classboard.models import Enrollment, Notification, NotificationType

logger = logging.getLogger(__name__)


@dataclass
class FanoutResult:
    """Result of a fanout.

    Attributes:
        class_id: Class whose students were notified.
        recipients: Distinct students enrolled when the fanout ran.
        notification_ids: IDs of the notifications created by this call.
        already_notified: Students skipped because an earlier fanout for the
            same cancellation reached them.
        errors: One message per student that could not be notified.
    """

    class_id: str
    recipients: int = 0
    notification_ids: list[str] = field(default_factory=list)
    already_notified: int = 0
    errors: list[str] = field(default_factory=list)

    @property
    def created(self) -> int:
        """Number of notifications created by this call."""
        return len(self.notification_ids)

    @property
    def delivered(self) -> int:
        """Students holding a notification after this call."""
        return self.created + self.already_notified

    @property
    def is_complete(self) -> bool:
        """Whether every enrolled student has a notification."""
        return self.delivered == self.recipients

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging or API responses."""
        return {
            "class_id": self.class_id,
            "recipients": self.recipients,
            "created": self.created,
            "already_notified": self.already_notified,
            "notification_ids": list(self.notification_ids),
            "errors": list(self.errors),
        }


class NotificationFanout:
    """Creates one notification per student enrolled in a class.

    Attributes:
        store: Entity store.
    """

    def __init__(self, store: EntityStore) -> None:
        """Initialize the fanout.

        Args:
            store: Entity store holding enrollment and notification records.
        """
        self.store = store

    async def fan_out(
        self,
        class_id: str,
        title: str,
        message: str,
        notification_type: NotificationType,
        cancellation_id: str | None = None,
    ) -> FanoutResult:
        """Notify every student currently enrolled in a class.

        Args:
            class_id: Class whose students are notified.
            title: Notification title.
            message: Notification message.
            notification_type: Type stored on each notification.
            cancellation_id: Cancellation the notices belong to. Students
                already notified for it are skipped.

        Returns:
            FanoutResult with the created notification IDs and any errors.

        Raises:
            StoreError: If the enrollment or notification list cannot be read.
        """
        enrollments = await self.store.find(Enrollment, class_id=class_id)
        student_ids = list(dict.fromkeys(e.student_id for e in enrollments))

        notified: set[str] = set()
        if cancellation_id is not None:
            earlier = await self.store.find(Notification, cancellation_id=cancellation_id)
            notified = {n.user_id for n in earlier}

        result = FanoutResult(class_id=class_id, recipients=len(student_ids))

        for student_id in student_ids:
            if student_id in notified:
                result.already_notified += 1
                continue
            try:
                notification = await self.store.create(
                    Notification(
                        user_id=student_id,
                        title=title,
                        message=message,
                        type=notification_type,
                        is_read=False,
                        cancellation_id=cancellation_id,
                    )
                )
                result.notification_ids.append(notification.id)
            except StoreError as e:
                error_msg = f"Failed to notify student {student_id}: {e}"
                logger.error(error_msg, exc_info=True)
                result.errors.append(error_msg)

        logger.info(
            "Fanned out %s notifications for class %s: %d new, %d already notified, %d students",
            notification_type.value,
            class_id,
            result.created,
            result.already_notified,
            result.recipients,
        )
        return result
