# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Class (scheduled course section) models.

A class meets once a week in a fixed slot. Slots are static records;
nothing here checks them against each other.
"""

from typing import Self

from pydantic import Field, model_validator

from classboard.models.common import TIME_PATTERN, EntityModel, RequestModel


def _check_time_range(start_time: str | None, end_time: str | None) -> None:
    # Zero-padded "HH:MM" strings order the same way as the times they encode
    if start_time is not None and end_time is not None and start_time >= end_time:
        raise ValueError(f"start_time {start_time} must be before end_time {end_time}")


class Class(EntityModel):
    """A weekly scheduled class taught by one teacher.

    Attributes:
        name: Course title, e.g. "Data Structures".
        code: Course code, e.g. "CS 201".
        teacher_id: Owning teacher's user id.
        room: Where the class meets.
        day_of_week: 0 (Sunday) through 6 (Saturday).
        start_time: "HH:MM" start.
        end_time: "HH:MM" end, after start_time.
        is_active: Whether the class currently runs.
    """

    name: str
    code: str
    teacher_id: str
    room: str
    day_of_week: int = Field(ge=0, le=6)
    start_time: str = Field(pattern=TIME_PATTERN)
    end_time: str = Field(pattern=TIME_PATTERN)
    is_active: bool = True

    @model_validator(mode="after")
    def validate_time_range(self) -> Self:
        _check_time_range(self.start_time, self.end_time)
        return self


class ClassCreateRequest(RequestModel):
    """Request to create a class."""

    name: str = Field(min_length=1, max_length=255)
    code: str = Field(min_length=1, max_length=50)
    teacher_id: str = Field(min_length=1)
    room: str = Field(min_length=1, max_length=255)
    day_of_week: int = Field(ge=0, le=6)
    start_time: str = Field(pattern=TIME_PATTERN)
    end_time: str = Field(pattern=TIME_PATTERN)
    is_active: bool = True

    @model_validator(mode="after")
    def validate_time_range(self) -> Self:
        _check_time_range(self.start_time, self.end_time)
        return self


class ClassUpdateRequest(RequestModel):
    """Partial update of a class. Only fields that are set are applied."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    code: str | None = Field(default=None, min_length=1, max_length=50)
    room: str | None = Field(default=None, min_length=1, max_length=255)
    day_of_week: int | None = Field(default=None, ge=0, le=6)
    start_time: str | None = Field(default=None, pattern=TIME_PATTERN)
    end_time: str | None = Field(default=None, pattern=TIME_PATTERN)
    is_active: bool | None = None
