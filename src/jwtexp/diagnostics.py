"""Diagnostic sinks for reporting unexpected extraction failures."""

from __future__ import annotations

import logging
import sys
from typing import Any, Protocol, runtime_checkable

import structlog

from jwtexp.settings import ExtractorSettings


@runtime_checkable
class DiagnosticSink(Protocol):
    """Anything that can record a critical event with keyword context.

    A structlog bound logger satisfies this protocol as-is.
    """

    def critical(self, event: str, **context: Any) -> Any: ...


class NullSink:
    """Sink that discards every event."""

    def critical(self, event: str, **context: Any) -> None:
        return None


NULL_SINK = NullSink()


def get_logger(name: str = "jwtexp") -> Any:
    return structlog.get_logger(name)


def configure_logging(settings: ExtractorSettings | None = None) -> None:
    """Configure structlog and the stdlib root handler from settings."""

    resolved = settings or ExtractorSettings()
    processors: list[Any] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]
    if resolved.log_json:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        # ConsoleRenderer formats exc_info itself.
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, resolved.log_level.upper()),
        force=True,
    )
