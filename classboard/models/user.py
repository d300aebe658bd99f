# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""User models."""

from pydantic import BaseModel, Field

from classboard.models.common import EntityModel, RequestModel, UserRole

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class User(EntityModel):
    """A teacher or student account.

    ``password`` holds the bcrypt hash, never the plain text.
    """

    email: str
    name: str
    role: UserRole
    password: str


class UserCreateRequest(RequestModel):
    """Request to create a user account."""

    email: str = Field(pattern=EMAIL_PATTERN, max_length=255)
    name: str = Field(min_length=1, max_length=255)
    role: UserRole
    password: str = Field(min_length=1)


class UserSummary(BaseModel):
    """User details safe to return to callers."""

    id: str
    email: str
    name: str
    role: UserRole

    @classmethod
    def from_user(cls, user: User) -> "UserSummary":
        return cls(id=user.id, email=user.email, name=user.name, role=user.role)
