# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""ClassBoard demo run.

Seeds the demo school, cancels the next CS 201 session and prints the
teacher and student dashboards as JSON.

Usage:
    python -m classboard             # in-memory store
    python -m classboard --database  # PostgreSQL from DB_* settings
"""

import asyncio
import json
import sys
from datetime import date, timedelta
from typing import Any

from classboard.core.config import Settings, get_settings
from classboard.domains.cancellation import CancellationService
from classboard.domains.dashboard import DashboardService
from classboard.domains.user.password import PasswordHasher
from classboard.infrastructure.database.seeds import DEMO_TEACHER_ID, seed_demo_data
from classboard.infrastructure.storage import EntityStore, InMemoryEntityStore
from classboard.models import CancelClassRequest
from classboard.utils.datetime import schedule_day_of_week, utc_now
from classboard.utils.logging import get_logger, setup_logging

logger = get_logger("classboard.demo")

DEMO_CLASS_ID = "class-1"
DEMO_STUDENT_ID = "student-1"


def next_session_date(day_of_week: int, today: date) -> date:
    """First date on or after ``today`` falling on a schedule day (0 = Sunday)."""
    return today + timedelta(days=(day_of_week - schedule_day_of_week(today)) % 7)


async def run_demo(
    store: EntityStore,
    password_hasher: PasswordHasher | None = None,
    today: date | None = None,
) -> dict[str, Any]:
    """Seed, cancel CS 201 and build both dashboards.

    Args:
        store: Store to run against.
        password_hasher: Hasher for the demo passwords.
        today: Reference date for picking the cancelled session.

    Returns:
        Dictionary with the cancellation result and both dashboards.
    """
    await seed_demo_data(store, password_hasher=password_hasher)

    session_date = next_session_date(2, today or utc_now().date())
    request = CancelClassRequest(
        class_id=DEMO_CLASS_ID,
        teacher_id=DEMO_TEACHER_ID,
        reason="Instructor illness",
        date=session_date,
        will_reschedule=True,
        idempotency_key=f"demo-{DEMO_CLASS_ID}-{session_date.isoformat()}",
    )
    result = await CancellationService(store).cancel_class(request)
    logger.info(
        "Demo cancellation recorded",
        cancellation_id=result.cancellation.id,
        notified=result.notifications_created,
    )

    dashboards = DashboardService(store)
    teacher = await dashboards.teacher_dashboard(DEMO_TEACHER_ID)
    student = await dashboards.student_dashboard(DEMO_STUDENT_ID)

    return {
        "cancellation": result.model_dump(mode="json"),
        "teacher_dashboard": teacher.to_dict(),
        "student_dashboard": student.to_dict(),
    }


async def _run_with_database(settings: Settings) -> dict[str, Any]:
    from classboard.infrastructure.database import (
        close_database,
        create_tables,
        get_session,
        init_database,
    )
    from classboard.infrastructure.storage import SQLEntityStore

    await init_database(settings)
    try:
        await create_tables()
        async with get_session() as session:
            return await run_demo(SQLEntityStore(session))
    finally:
        await close_database()


def main(argv: list[str] | None = None) -> int:
    """Entry point for ``python -m classboard`` and ``classboard-demo``."""
    args = sys.argv[1:] if argv is None else argv
    settings = get_settings()
    setup_logging(settings)

    if "--database" in args:
        output = asyncio.run(_run_with_database(settings))
    else:
        output = asyncio.run(run_demo(InMemoryEntityStore()))

    print(json.dumps(output, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
