# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Cancellation domain package.

This package provides class cancellation functionality including:
- Recording a cancellation and notifying enrolled students
- Idempotent retries via a client-supplied key
- Cancellation listings per teacher and per class
"""

from classboard.domains.cancellation.service import (
    CANCELLATION_TITLE,
    CancellationNotFoundError,
    CancellationService,
    CancellationServiceError,
    build_cancellation_message,
)

__all__ = [
    "CancellationService",
    "CancellationServiceError",
    "CancellationNotFoundError",
    "CANCELLATION_TITLE",
    "build_cancellation_message",
]
