# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Notification domain package.

Key Components:
- NotificationService: per-user inbox, unread counts and read state
- NotificationFanout: one notification per student enrolled in a class
- FanoutResult: counts and errors of a fanout

Usage:
    from classboard.domains.notification import NotificationFanout

    fanout = NotificationFanout(store)
    result = await fanout.fan_out(
        class_id="class-1",
        title="Class Cancelled",
        message="CS 201 - Data Structures has been cancelled.",
        notification_type=NotificationType.CANCELLATION,
    )
"""

from classboard.domains.notification.fanout import FanoutResult, NotificationFanout
from classboard.domains.notification.service import NotificationService

__all__ = [
    "NotificationService",
    "NotificationFanout",
    "FanoutResult",
]
