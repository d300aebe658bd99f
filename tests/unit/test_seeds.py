# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for demo data seeding."""

import pytest

from classboard.domains.class_ import ClassService
from classboard.domains.enrollment import EnrollmentService
from classboard.infrastructure.database.seeds import DEMO_PASSWORD, seed_demo_data
from classboard.models import Class, Enrollment, User, UserRole


class TestSeedDemoData:
    """Tests for seed_demo_data."""

    @pytest.mark.asyncio
    async def test_seeds_users_classes_enrollments(self, store, fast_hasher) -> None:
        created = await seed_demo_data(store, password_hasher=fast_hasher)

        assert created is True
        assert await store.count(User, role=UserRole.TEACHER) == 1
        assert await store.count(User, role=UserRole.STUDENT) == 3
        assert await store.count(Class) == 3
        assert await store.count(Enrollment) == 6

    @pytest.mark.asyncio
    async def test_demo_schedule(self, store, fast_hasher) -> None:
        await seed_demo_data(store, password_hasher=fast_hasher)

        classes = await ClassService(store).list_by_teacher("teacher-1")

        assert [c.code for c in classes] == ["CS 201", "CS 301", "CS 401"]
        assert all(c.day_of_week == 2 for c in classes)

    @pytest.mark.asyncio
    async def test_enrollment_counts(self, store, fast_hasher) -> None:
        await seed_demo_data(store, password_hasher=fast_hasher)
        service = EnrollmentService(store)

        assert await service.count_by_class("class-1") == 3
        assert await service.count_by_class("class-2") == 2
        assert await service.count_by_class("class-3") == 1

    @pytest.mark.asyncio
    async def test_passwords_hashed(self, store, fast_hasher) -> None:
        await seed_demo_data(store, password_hasher=fast_hasher)

        teacher = await store.get(User, "teacher-1")

        assert teacher.password != DEMO_PASSWORD
        assert fast_hasher.verify(DEMO_PASSWORD, teacher.password)

    @pytest.mark.asyncio
    async def test_second_run_skipped(self, store, fast_hasher) -> None:
        await seed_demo_data(store, password_hasher=fast_hasher)

        assert await seed_demo_data(store, password_hasher=fast_hasher) is False
        assert await store.count(User) == 4
