# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Entity store package.

- EntityStore: abstract async keyed-record store used by every service
- InMemoryEntityStore: dict-backed store for tests and demos
- SQLEntityStore: SQLAlchemy-backed store for deployment
"""

from classboard.infrastructure.storage.base import EntityStore, StoreError, check_fields
from classboard.infrastructure.storage.memory import InMemoryEntityStore
from classboard.infrastructure.storage.sql import SQLEntityStore

__all__ = [
    "EntityStore",
    "StoreError",
    "check_fields",
    "InMemoryEntityStore",
    "SQLEntityStore",
]
