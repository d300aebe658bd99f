# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Configuration package for ClassBoard.

Settings are Pydantic models loaded from environment variables and an
optional .env file.

Example:
    >>> from classboard.core.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.environment)
    'development'
"""

from classboard.core.config.settings import (
    AttendanceSettings,
    DashboardSettings,
    DatabaseSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    "clear_settings_cache",
    # Subsettings
    "DatabaseSettings",
    "AttendanceSettings",
    "DashboardSettings",
]
