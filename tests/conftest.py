# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest configuration and shared fixtures.

Service tests run against the in-memory entity store; SQL store tests mock
the SQLAlchemy session instead.
"""

import logging
from collections.abc import Generator
from datetime import date

import pytest
import pytest_asyncio

from classboard.core.config import clear_settings_cache
from classboard.domains.user.password import PasswordHasher
from classboard.infrastructure.storage import InMemoryEntityStore
from classboard.models import Class, Enrollment, User, UserRole
from classboard.utils.logging import PACKAGE_LOGGER, clear_context


# =============================================================================
# Marker Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )


# =============================================================================
# Settings Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings() -> Generator[None, None, None]:
    """Drop cached settings before and after every test."""
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Undo handlers and context installed by setup_logging."""
    yield
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.handlers = []
    package_logger.propagate = True
    package_logger.setLevel(logging.NOTSET)
    clear_context()


# =============================================================================
# Store Fixtures
# =============================================================================


@pytest.fixture
def store() -> InMemoryEntityStore:
    """Provide an empty in-memory entity store."""
    return InMemoryEntityStore()


@pytest.fixture
def fast_hasher() -> PasswordHasher:
    """Bcrypt hasher with the minimum work factor to keep tests fast."""
    return PasswordHasher(rounds=4)


# =============================================================================
# Sample Data Fixtures
# =============================================================================


@pytest.fixture
def tuesday() -> date:
    """A Tuesday (schedule day 2)."""
    return date(2024, 3, 12)


@pytest_asyncio.fixture
async def teacher(store: InMemoryEntityStore) -> User:
    """Create a teacher account."""
    return await store.create(
        User(
            id="teacher-1",
            email="professor.anderson@university.edu",
            name="Prof. Anderson",
            role=UserRole.TEACHER,
            password="hashed",
        )
    )


@pytest_asyncio.fixture
async def students(store: InMemoryEntityStore) -> list[User]:
    """Create three student accounts."""
    created = []
    for index, name in enumerate(["John Doe", "Sarah Johnson", "Mike Chen"], start=1):
        created.append(
            await store.create(
                User(
                    id=f"student-{index}",
                    email=f"student{index}@student.edu",
                    name=name,
                    role=UserRole.STUDENT,
                    password="hashed",
                )
            )
        )
    return created


@pytest_asyncio.fixture
async def cs201(store: InMemoryEntityStore, teacher: User) -> Class:
    """Create CS 201 on Tuesdays at 09:00."""
    return await store.create(
        Class(
            id="class-1",
            name="Data Structures",
            code="CS 201",
            teacher_id=teacher.id,
            room="Engineering Hall 205",
            day_of_week=2,
            start_time="09:00",
            end_time="10:30",
        )
    )


@pytest_asyncio.fixture
async def cs201_enrollments(
    store: InMemoryEntityStore,
    cs201: Class,
    students: list[User],
) -> list[Enrollment]:
    """Enroll all three students in CS 201."""
    return [
        await store.create(Enrollment(student_id=s.id, class_id=cs201.id))
        for s in students
    ]
