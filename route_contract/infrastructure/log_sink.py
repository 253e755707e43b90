"""Log Sink Registry — process-wide slot for the log delivery function.

Invariants:
    - One active sink per process; configure_sink() replaces it (last writer wins)
    - current_sink() never returns None: unset slot yields a warning-only stub
    - A sink receives the full event list of one request, possibly empty

Design Decisions:
    - Plain module global, no lock: configuration happens at startup before traffic
    - Runners accept an injected sink and only fall back to this registry when none
      was given, so most code never touches the global
"""

import logging
from typing import Awaitable, Callable, Sequence

from route_contract.schemas.log_event import LogEvent, LogLevel

logger = logging.getLogger(__name__)

LoggingFunction = Callable[[list[LogEvent]], Awaitable[None]]

_active_sink: LoggingFunction | None = None

_STDLIB_LEVELS = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARN: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
}


async def _missing_sink(events: list[LogEvent]) -> None:
    logger.warning(
        "No log sink configured",
        extra={"event_count": len(events)},
    )


def configure_sink(sink: LoggingFunction) -> None:
    global _active_sink
    _active_sink = sink


def reset_sink() -> None:
    global _active_sink
    _active_sink = None


def current_sink() -> LoggingFunction:
    return _active_sink if _active_sink is not None else _missing_sink


def is_sink_configured() -> bool:
    return _active_sink is not None


def logging_sink(logger_name: str = "route_contract.events") -> LoggingFunction:
    """Sink that forwards events into stdlib logging.

    tags and metadata travel as record extras, so JSONFormatter emits them.
    """
    target = logging.getLogger(logger_name)

    async def deliver(events: Sequence[LogEvent]) -> None:
        for event in events:
            target.log(
                _STDLIB_LEVELS[event.level], event.message,
                extra={
                    "tags": list(event.tags),
                    "metadata": dict(event.metadata),
                    "event_severity": event.level.severity,
                },
            )

    return deliver
