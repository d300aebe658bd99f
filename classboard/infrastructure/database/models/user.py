# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""User table."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from classboard.infrastructure.database.models.base import Base, IdMixin


class UserRecord(IdMixin, Base):
    """Teacher and student accounts."""

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(20), nullable=False)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
