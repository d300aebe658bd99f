# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Database package: async engine/session management and ORM tables."""

from classboard.infrastructure.database.connection import (
    DatabaseError,
    check_database_connection,
    close_database,
    create_tables,
    get_engine,
    get_session,
    get_sessionmaker,
    init_database,
)

__all__ = [
    "DatabaseError",
    "init_database",
    "close_database",
    "create_tables",
    "get_engine",
    "get_sessionmaker",
    "get_session",
    "check_database_connection",
]
