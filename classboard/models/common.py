# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Shared model types: enums, id generation and the entity base class."""

from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

# "HH:MM", 24-hour clock
TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


def generate_id() -> str:
    """Generate a globally unique opaque record id."""
    return str(uuid4())


class UserRole(str, Enum):
    """Role of a user account."""

    TEACHER = "teacher"
    STUDENT = "student"


class NotificationType(str, Enum):
    """Kind of in-app notification."""

    CANCELLATION = "cancellation"
    ANNOUNCEMENT = "announcement"
    ENROLLMENT = "enrollment"


class AttendanceStatus(str, Enum):
    """Attendance mark for one student in one session."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    EXCUSED = "excused"


class CancellationStatus(str, Enum):
    """Fanout progress of a cancellation.

    created -> fanned_out | fanned_out_partial
    """

    CREATED = "created"
    FANNED_OUT = "fanned_out"
    FANNED_OUT_PARTIAL = "fanned_out_partial"


class EntityModel(BaseModel):
    """Base class for records kept in the entity store.

    Attributes:
        id: Opaque unique id, generated when the record is built.
    """

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(default_factory=generate_id)


class RequestModel(BaseModel):
    """Base class for validated service inputs."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")
