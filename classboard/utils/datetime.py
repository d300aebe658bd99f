# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""DateTime utilities for ClassBoard.

Design Decisions:
-----------------
1. All timestamps are timezone-aware UTC datetimes
2. Calendar dates (class sessions, attendance) are plain ``datetime.date``
3. Day of week follows the schedule convention: 0 = Sunday ... 6 = Saturday

Usage:
------
    from classboard.utils.datetime import utc_now

    # For pydantic model defaults
    created_at: datetime = Field(default_factory=utc_now)
"""

from collections.abc import Callable, Iterable
from datetime import date, datetime, timedelta, timezone
from typing import TypeVar

T = TypeVar("T")


def utc_now() -> datetime:
    """Get current UTC time as timezone-aware datetime.

    Returns:
        Timezone-aware datetime representing current UTC time.
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Ensure a datetime is timezone-aware UTC.

    Args:
        dt: A datetime object (naive or aware) or None.

    Returns:
        Timezone-aware UTC datetime or None.

    Note:
        - If dt is None, returns None
        - If dt is naive, assumes UTC and adds tzinfo
        - If dt is aware, converts to UTC
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)

    return dt.astimezone(timezone.utc)


def days_before(moment: datetime, days: int) -> datetime:
    """Get a datetime N days before the given moment.

    Args:
        moment: Reference point (naive values are treated as UTC).
        days: Number of days to go back.

    Returns:
        Timezone-aware UTC datetime.
    """
    return ensure_utc(moment) - timedelta(days=days)


def schedule_day_of_week(day: date) -> int:
    """Convert a calendar date to the schedule's day-of-week index.

    Python's ``date.weekday()`` counts Monday as 0; class schedules count
    Sunday as 0.

    Args:
        day: Calendar date.

    Returns:
        Integer in 0..6 where 0 is Sunday.
    """
    return (day.weekday() + 1) % 7


def newest_first(items: Iterable[T], key: Callable[[T], datetime]) -> list[T]:
    """Sort records by a timestamp, most recent first.

    Records with equal timestamps keep reverse input order, so for a store
    that lists in insertion order the record created last still comes first.

    Args:
        items: Records to sort.
        key: Returns the timestamp of a record.

    Returns:
        New list, newest first.
    """
    return sorted(reversed(list(items)), key=key, reverse=True)

