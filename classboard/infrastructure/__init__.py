# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Infrastructure layer for ClassBoard.

- database: SQLAlchemy engine, sessions, ORM tables and demo seed data
- storage: entity store interface and its in-memory and SQL backends
"""
