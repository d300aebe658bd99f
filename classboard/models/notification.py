# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Notification models."""

from datetime import datetime

from pydantic import Field

from classboard.models.common import EntityModel, NotificationType, RequestModel
from classboard.utils.datetime import utc_now


class Notification(EntityModel):
    """In-app notification addressed to a single user.

    ``is_read`` only ever moves from False to True. ``cancellation_id`` links
    a cancellation notice to the cancellation that produced it.
    """

    user_id: str
    title: str
    message: str
    type: NotificationType
    is_read: bool = False
    created_at: datetime = Field(default_factory=utc_now)
    cancellation_id: str | None = None


class NotificationCreateRequest(RequestModel):
    """Request to create a notification for one user."""

    user_id: str = Field(min_length=1)
    title: str = Field(min_length=1, max_length=255)
    message: str = Field(min_length=1)
    type: NotificationType
