# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Declarative base for ClassBoard ORM tables."""

from sqlalchemy import String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Declarative base shared by all tables."""

    pass


class IdMixin:
    """Primary key column holding the entity's opaque string id."""

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
