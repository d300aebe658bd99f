# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Cancellation models."""

from datetime import date, datetime

from pydantic import BaseModel, Field

from classboard.models.common import CancellationStatus, EntityModel, RequestModel
from classboard.utils.datetime import utc_now


class Cancellation(EntityModel):
    """A teacher-initiated cancellation of one class session.

    Attributes:
        class_id: Cancelled class.
        teacher_id: Teacher who cancelled.
        reason: Reason shown to students.
        additional_notes: Optional free text.
        will_reschedule: Whether a make-up session is planned.
        cancelled_at: When the cancellation was recorded.
        date: Calendar date the cancelled session would have occurred.
        status: Fanout progress.
        notifications_created: Students holding a notice for this cancellation.
        idempotency_key: Client token used to deduplicate retries.
    """

    class_id: str
    teacher_id: str
    reason: str
    additional_notes: str | None = None
    will_reschedule: bool = False
    cancelled_at: datetime = Field(default_factory=utc_now)
    date: date
    status: CancellationStatus = CancellationStatus.CREATED
    notifications_created: int = 0
    idempotency_key: str | None = None


class CancelClassRequest(RequestModel):
    """Request to cancel a class session.

    ``class_id`` and ``reason`` must be non-empty; validation happens when the
    request is built, so nothing is persisted for an invalid request.
    """

    class_id: str = Field(min_length=1)
    teacher_id: str = Field(min_length=1)
    reason: str = Field(min_length=1, max_length=500)
    date: date
    additional_notes: str | None = None
    will_reschedule: bool = False
    idempotency_key: str | None = Field(default=None, min_length=1, max_length=255)


class CancellationResult(BaseModel):
    """Outcome of cancelling a class."""

    cancellation: Cancellation
    notifications_created: int
