# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Cancellation service for teacher-initiated class cancellations.

Cancelling a class is a two-phase workflow:
1. Persist the cancellation (status ``created``)
2. Fan out one notification per enrolled student, then record the
   outcome (status ``fanned_out`` or ``fanned_out_partial``)

The phases are not atomic. The cancellation record is authoritative once
phase 1 succeeds: it is never rolled back, and the call reports success
even when fewer notifications were created than students enrolled.
Clients that retry should send an idempotency key. A retry returns the
recorded cancellation instead of notifying everyone again, and finishes
the fanout of a cancellation that stopped in ``created`` or
``fanned_out_partial``, notifying only the students still missing a notice.
"""

from __future__ import annotations

import logging
from datetime import date

from classboard.domains.notification.fanout import NotificationFanout
from classboard.infrastructure.storage import EntityStore, StoreError
from classboard.models import (
    CancelClassRequest,
    Cancellation,
    CancellationResult,
    CancellationStatus,
    Class,
    NotificationType,
)
from classboard.utils.datetime import newest_first
from classboard.utils.logging import log_context

logger = logging.getLogger(__name__)

CANCELLATION_TITLE = "Class Cancelled"


class CancellationServiceError(Exception):
    """Base exception for cancellation service errors."""

    pass


class CancellationNotFoundError(CancellationServiceError):
    """Raised when cancellation is not found."""

    pass


def build_cancellation_message(
    class_: Class | None,
    reason: str,
    will_reschedule: bool = False,
) -> str:
    """Build the notification text for a cancelled class.

    Args:
        class_: The cancelled class, or None if it could not be loaded.
        reason: Reason given by the teacher.
        will_reschedule: Whether a make-up session is planned.

    Returns:
        Message text. Class code and name are omitted when the class is unknown.
    """
    if class_ is not None:
        message = f"{class_.code} - {class_.name} has been cancelled. Reason: {reason}"
    else:
        message = f"Your class has been cancelled. Reason: {reason}"

    if will_reschedule:
        message = message.rstrip(".") + ". The class will be rescheduled."
    return message


class CancellationService:
    """Service for cancelling classes and notifying enrolled students.

    Attributes:
        store: Entity store.
    """

    def __init__(
        self,
        store: EntityStore,
        fanout: NotificationFanout | None = None,
    ) -> None:
        """Initialize the cancellation service.

        Args:
            store: Entity store holding cancellation records.
            fanout: Notification fanout; built on the same store if omitted.
        """
        self.store = store
        self._fanout = fanout or NotificationFanout(store)

    async def cancel_class(self, request: CancelClassRequest) -> CancellationResult:
        """Cancel a class session and notify its enrolled students.

        A request carrying an idempotency key that is already recorded does
        not create a second cancellation. If that cancellation finished its
        fanout it is returned as is; otherwise the fanout is resumed for the
        enrolled students who have no notice for it yet.

        Args:
            request: Validated cancellation request.

        Returns:
            CancellationResult with the stored cancellation and the number
            of students holding a notification for it.

        Raises:
            StoreError: If the cancellation itself cannot be persisted.
        """
        with log_context(teacher_id=request.teacher_id, class_id=request.class_id):
            if request.idempotency_key:
                existing = await self._get_by_idempotency_key(request.idempotency_key)
                if existing is not None:
                    return await self._replay(existing)

            cancellation = await self.store.create(
                Cancellation(
                    class_id=request.class_id,
                    teacher_id=request.teacher_id,
                    reason=request.reason,
                    additional_notes=request.additional_notes,
                    will_reschedule=request.will_reschedule,
                    date=request.date,
                    idempotency_key=request.idempotency_key,
                )
            )

            logger.info(
                "Cancelled class %s for %s by teacher %s: %s",
                cancellation.class_id,
                cancellation.date.isoformat(),
                cancellation.teacher_id,
                cancellation.id,
            )

            return await self._notify_students(cancellation)

    async def get_cancellation(self, cancellation_id: str) -> Cancellation:
        """Get cancellation by ID.

        Raises:
            CancellationNotFoundError: If cancellation not found.
        """
        cancellation = await self.store.get(Cancellation, cancellation_id)
        if cancellation is None:
            raise CancellationNotFoundError(f"Cancellation {cancellation_id} not found")
        return cancellation

    async def list_by_teacher(
        self,
        teacher_id: str,
        on_date: date | None = None,
    ) -> list[Cancellation]:
        """List a teacher's cancellations, most recently cancelled first.

        Args:
            teacher_id: Teacher identifier.
            on_date: Only cancellations of sessions on this date.
        """
        filters: dict[str, object] = {"teacher_id": teacher_id}
        if on_date is not None:
            filters["date"] = on_date

        return newest_first(
            await self.store.find(Cancellation, **filters),
            key=lambda c: c.cancelled_at,
        )

    async def list_by_class(self, class_id: str) -> list[Cancellation]:
        """List a class's cancellations, most recently cancelled first."""
        return newest_first(
            await self.store.find(Cancellation, class_id=class_id),
            key=lambda c: c.cancelled_at,
        )

    async def _replay(self, existing: Cancellation) -> CancellationResult:
        if existing.status == CancellationStatus.FANNED_OUT:
            logger.info(
                "Cancellation %s already recorded for idempotency key %s",
                existing.id,
                existing.idempotency_key,
            )
            return CancellationResult(
                cancellation=existing,
                notifications_created=existing.notifications_created,
            )

        logger.warning(
            "Resuming fanout for cancellation %s left in status %s",
            existing.id,
            existing.status.value,
        )
        return await self._notify_students(existing)

    async def _notify_students(self, cancellation: Cancellation) -> CancellationResult:
        """Fan the cancellation out and record how far it got."""
        class_ = await self._get_class_for_display(cancellation.class_id)
        message = build_cancellation_message(
            class_, cancellation.reason, cancellation.will_reschedule
        )

        try:
            fanout = await self._fanout.fan_out(
                class_id=cancellation.class_id,
                title=CANCELLATION_TITLE,
                message=message,
                notification_type=NotificationType.CANCELLATION,
                cancellation_id=cancellation.id,
            )
            delivered, complete = fanout.delivered, fanout.is_complete
        except StoreError:
            logger.error(
                "Fanout for cancellation %s could not read its recipients",
                cancellation.id,
                exc_info=True,
            )
            delivered, complete = cancellation.notifications_created, False

        cancellation = await self._record_fanout(cancellation, delivered, complete)

        return CancellationResult(cancellation=cancellation, notifications_created=delivered)

    async def _get_by_idempotency_key(self, key: str) -> Cancellation | None:
        matches = await self.store.find(Cancellation, idempotency_key=key)
        return matches[0] if matches else None

    async def _get_class_for_display(self, class_id: str) -> Class | None:
        """Load the class for notification text.

        A missing class only degrades the message; it never fails the
        cancellation.
        """
        try:
            class_ = await self.store.get(Class, class_id)
        except StoreError:
            logger.warning("Could not load class %s for notification text", class_id, exc_info=True)
            return None

        if class_ is None:
            logger.warning("Cancelled class %s not found, sending generic notification text", class_id)
        return class_

    async def _record_fanout(
        self,
        cancellation: Cancellation,
        created: int,
        complete: bool,
    ) -> Cancellation:
        """Move the cancellation to its final fanout state."""
        changes = {
            "status": CancellationStatus.FANNED_OUT if complete else CancellationStatus.FANNED_OUT_PARTIAL,
            "notifications_created": created,
        }

        if not complete:
            logger.warning(
                "Cancellation %s notified only %d students; fanout incomplete",
                cancellation.id,
                created,
            )

        try:
            updated = await self.store.update(Cancellation, cancellation.id, changes)
        except StoreError:
            logger.error(
                "Failed to record fanout status for cancellation %s",
                cancellation.id,
                exc_info=True,
            )
            updated = None

        if updated is None:
            return cancellation.model_copy(update=changes)
        return updated
