# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Structured logging configuration using structlog.

Service modules log through ``logging.getLogger(__name__)``. setup_logging
attaches a structlog ``ProcessorFormatter`` to the ``classboard`` logger, so
those stdlib records are rendered by structlog (console in development,
JSON elsewhere) and carry any context bound with ``log_context`` or
``bind_context``, such as the teacher and class of a cancellation.

Example:
    >>> from classboard.utils.logging import setup_logging, log_context
    >>> from classboard.core.config import get_settings
    >>> setup_logging(get_settings())
    >>> with log_context(teacher_id="teacher-1", class_id="class-1"):
    ...     await service.cancel_class(request)
"""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import IO, TYPE_CHECKING

import structlog
from structlog.types import Processor

if TYPE_CHECKING:
    from classboard.core.config.settings import Settings

PACKAGE_LOGGER = "classboard"

_QUIET_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool", "asyncpg")


def _pre_chain() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]


def setup_logging(settings: "Settings", stream: IO[str] | None = None) -> None:
    """Configure structured logging for ClassBoard.

    Safe to call more than once; the handler installed by an earlier call
    is replaced.

    Args:
        settings: Application settings providing log_level and environment.
        stream: Output stream, stdout by default.
    """
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    if settings.is_development or settings.debug:
        renderer: Processor = structlog.dev.ConsoleRenderer(colors=stream is None)
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            *_pre_chain(),
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_pre_chain(),
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            renderer,
        ],
    )
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(formatter)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.handlers = [handler]
    package_logger.setLevel(log_level)
    package_logger.propagate = False

    for logger_name in _QUIET_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger whose output goes through the package handler.

    Args:
        name: Logger name; use a ``classboard.*`` name for it to be rendered.
    """
    return structlog.get_logger(name)


def bind_context(**kwargs: object) -> None:
    """Bind values to every later log line in the current context."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear all bound context variables."""
    structlog.contextvars.clear_contextvars()


@contextmanager
def log_context(**kwargs: object) -> Iterator[None]:
    """Bind values for the duration of a block, restoring the previous ones after.

    Example:
        with log_context(cancellation_id=cancellation.id):
            ...
    """
    with structlog.contextvars.bound_contextvars(**kwargs):
        yield
