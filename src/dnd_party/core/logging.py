"""Structured logging for dnd-party.

structlog renders engine and service events either for a terminal or as
JSON lines, as selected by Settings.log_level and Settings.json_logs.
Service calls run inside character_context(), so every event logged while
handling a request carries the character name it concerns.

Example:
    >>> from dnd_party.core.logging import character_context, get_logger
    >>> logger = get_logger(__name__)
    >>> with character_context("Kaelin", action="damage"):
    ...     logger.info("Damage applied", amount=4)  # includes character and action
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

import structlog
from structlog.types import Processor


if TYPE_CHECKING:
    from structlog.types import EventDict, WrappedLogger

    from dnd_party.core.config import Settings


# Clients whose per-request logging drowns out character events
NOISY_LOGGERS = ("httpx", "httpcore", "openai")

STDLIB_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def app_context_processor(app_name: str) -> Processor:
    """Build a processor that stamps every event with the application name.

    Args:
        app_name: Value for the ``app`` key, normally Settings.app_name.
    """

    def add_app_context(
        logger: WrappedLogger,
        method_name: str,
        event_dict: EventDict,
    ) -> EventDict:
        event_dict.setdefault("app", app_name)
        return event_dict

    return add_app_context


def configure_logging(
    settings: Settings | None = None,
    *,
    log_file: str | None = None,
) -> None:
    """Configure structlog and standard library logging from settings.

    Args:
        settings: Application settings; defaults to get_settings().
        log_file: Optional path that also receives standard library records.
    """
    if settings is None:
        from dnd_party.core.config import get_settings

        settings = get_settings()

    log_level = getattr(logging, settings.log_level, logging.INFO)

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        app_context_processor(settings.app_name),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if settings.json_logs:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=sys.stdout.isatty(),
                exception_formatter=structlog.dev.plain_traceback,
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format=STDLIB_FORMAT, level=log_level, stream=sys.stdout, force=True)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(log_level)
        file_handler.setFormatter(logging.Formatter(STDLIB_FORMAT))
        logging.getLogger().addHandler(file_handler)


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a structlog logger, typically with ``__name__``."""
    return structlog.get_logger(name)


@contextmanager
def character_context(name: str, **extra: Any) -> Iterator[None]:
    """Bind the character name (and any extra fields) for the enclosed block.

    Only the keys bound here are removed on exit, so an outer context
    survives nested calls.
    """
    with structlog.contextvars.bound_contextvars(character=name, **extra):
        yield


__all__ = [
    "app_context_processor",
    "configure_logging",
    "get_logger",
    "character_context",
]
