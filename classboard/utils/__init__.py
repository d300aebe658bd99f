# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Utility functions and helpers for ClassBoard.

This package contains cross-cutting utilities:
- logging: Structured logging with structlog
- datetime: Timezone-aware datetime operations
"""

from classboard.utils.datetime import (
    days_before,
    ensure_utc,
    newest_first,
    schedule_day_of_week,
    utc_now,
)
from classboard.utils.logging import (
    bind_context,
    clear_context,
    get_logger,
    log_context,
    setup_logging,
)

__all__ = [
    # Logging
    "setup_logging",
    "get_logger",
    "bind_context",
    "clear_context",
    "log_context",
    # Datetime
    "utc_now",
    "ensure_utc",
    "days_before",
    "schedule_day_of_week",
    "newest_first",
]
