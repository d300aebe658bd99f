# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""User service for account records.

Login and sessions live outside this package; this service creates and
looks up accounts and changes their passwords.
"""

import logging

from classboard.domains.user.password import PasswordHasher
from classboard.infrastructure.storage import EntityStore
from classboard.models import User, UserCreateRequest

logger = logging.getLogger(__name__)


class UserServiceError(Exception):
    """Base exception for user service errors."""

    pass


class UserNotFoundError(UserServiceError):
    """Raised when user is not found."""

    pass


class EmailExistsError(UserServiceError):
    """Raised when an account with the email already exists."""

    pass


class InvalidPasswordError(UserServiceError):
    """Raised when the current password given for a change does not match."""

    pass


class UserService:
    """Service for creating and looking up user accounts.

    Attributes:
        store: Entity store.
    """

    def __init__(
        self,
        store: EntityStore,
        password_hasher: PasswordHasher | None = None,
    ) -> None:
        """Initialize user service.

        Args:
            store: Entity store holding user records.
            password_hasher: Hasher for new passwords.
        """
        self.store = store
        self._hasher = password_hasher or PasswordHasher()

    async def create_user(self, request: UserCreateRequest) -> User:
        """Create a user account.

        Emails are compared case-insensitively and stored lower-cased.

        Raises:
            EmailExistsError: If the email is already registered.
        """
        email = request.email.lower()
        if await self.get_user_by_email(email) is not None:
            raise EmailExistsError(f"User with email '{email}' already exists")

        user = await self.store.create(
            User(
                email=email,
                name=request.name,
                role=request.role,
                password=self._hasher.hash(request.password),
            )
        )

        logger.info("Created %s account: %s", user.role.value, user.id)
        return user

    async def get_user(self, user_id: str) -> User:
        """Get a user by id.

        Raises:
            UserNotFoundError: If no such user exists.
        """
        user = await self.store.get(User, user_id)
        if user is None:
            raise UserNotFoundError(f"User {user_id} not found")
        return user

    async def get_user_by_email(self, email: str) -> User | None:
        """Find a user by email, or None."""
        matches = await self.store.find(User, email=email.lower())
        return matches[0] if matches else None

    async def change_password(
        self,
        user_id: str,
        current_password: str,
        new_password: str,
    ) -> User:
        """Replace a user's password after checking the current one.

        Raises:
            UserNotFoundError: If no such user exists.
            InvalidPasswordError: If ``current_password`` does not match.
            ValueError: If ``new_password`` is empty.
        """
        user = await self.get_user(user_id)
        if not self._hasher.verify(current_password, user.password):
            logger.warning("Rejected password change for user %s", user_id)
            raise InvalidPasswordError(f"Current password for user {user_id} is incorrect")

        updated = await self.store.update(
            User, user_id, {"password": self._hasher.hash(new_password)}
        )
        if updated is None:
            raise UserNotFoundError(f"User {user_id} not found")

        logger.info("Changed password for user %s", user_id)
        return updated
