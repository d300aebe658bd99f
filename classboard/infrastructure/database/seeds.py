# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Demo data seeding.

Populates an entity store with one teacher, three students, three Tuesday
classes and six enrollments. Seeding is skipped when the demo teacher
already exists.

Example:
    store = InMemoryEntityStore()
    await seed_demo_data(store)
"""

import logging

from classboard.domains.user.password import PasswordHasher
from classboard.infrastructure.storage import EntityStore
from classboard.models import Class, Enrollment, User, UserRole

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "password123"
DEMO_TEACHER_ID = "teacher-1"

_STUDENTS = [
    ("student-1", "john.doe@student.edu", "John Doe"),
    ("student-2", "sarah.johnson@student.edu", "Sarah Johnson"),
    ("student-3", "mike.chen@student.edu", "Mike Chen"),
]

# (id, name, code, room, start, end); all on Tuesday
_CLASSES = [
    ("class-1", "Data Structures", "CS 201", "Engineering Hall 205", "09:00", "10:30"),
    ("class-2", "Database Systems", "CS 301", "Engineering Hall 210", "14:00", "15:30"),
    ("class-3", "Software Engineering", "CS 401", "Engineering Hall 301", "16:00", "17:30"),
]

_ENROLLMENTS = [
    ("enrollment-1", "student-1", "class-1"),
    ("enrollment-2", "student-2", "class-1"),
    ("enrollment-3", "student-3", "class-1"),
    ("enrollment-4", "student-1", "class-2"),
    ("enrollment-5", "student-2", "class-2"),
    ("enrollment-6", "student-1", "class-3"),
]


async def seed_demo_data(
    store: EntityStore,
    password_hasher: PasswordHasher | None = None,
) -> bool:
    """Seed the demo teacher, students, classes and enrollments.

    Args:
        store: Store to populate.
        password_hasher: Hasher for the demo password. Defaults to a
            standard bcrypt hasher.

    Returns:
        True if data was created, False if the demo teacher already existed.
    """
    if await store.get(User, DEMO_TEACHER_ID) is not None:
        logger.info("Demo data already present, skipping seed")
        return False

    hasher = password_hasher or PasswordHasher()
    password = hasher.hash(DEMO_PASSWORD)

    await store.create(
        User(
            id=DEMO_TEACHER_ID,
            email="professor.anderson@university.edu",
            name="Prof. Anderson",
            role=UserRole.TEACHER,
            password=password,
        )
    )
    for student_id, email, name in _STUDENTS:
        await store.create(
            User(
                id=student_id,
                email=email,
                name=name,
                role=UserRole.STUDENT,
                password=password,
            )
        )

    for class_id, name, code, room, start_time, end_time in _CLASSES:
        await store.create(
            Class(
                id=class_id,
                name=name,
                code=code,
                teacher_id=DEMO_TEACHER_ID,
                room=room,
                day_of_week=2,
                start_time=start_time,
                end_time=end_time,
            )
        )

    for enrollment_id, student_id, class_id in _ENROLLMENTS:
        await store.create(
            Enrollment(id=enrollment_id, student_id=student_id, class_id=class_id)
        )

    logger.info(
        "Seeded demo data: %d users, %d classes, %d enrollments",
        len(_STUDENTS) + 1,
        len(_CLASSES),
        len(_ENROLLMENTS),
    )
    return True
