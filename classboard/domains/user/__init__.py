# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""User domain package.

This package provides account management:
- Account creation with unique emails
- Password changes checked against the stored bcrypt hash
"""

from classboard.domains.user.password import PasswordHasher
from classboard.domains.user.service import (
    EmailExistsError,
    InvalidPasswordError,
    UserNotFoundError,
    UserService,
    UserServiceError,
)

__all__ = [
    "UserService",
    "UserServiceError",
    "UserNotFoundError",
    "EmailExistsError",
    "InvalidPasswordError",
    "PasswordHasher",
]
