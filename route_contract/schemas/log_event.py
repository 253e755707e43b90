"""Log Event Schema — the structured event a handler buffers via ctx.log().

Invariants:
    - level is one of debug / info / warn / error
    - Severities are debug=0, info=1, error=2, warn=3 (wire-compatible ordering, not rank)
    - tags keep insertion order; metadata is string -> string
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class LogLevel(str, Enum):
    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"

    @property
    def severity(self) -> int:
        return LOG_LEVEL_SEVERITY[self]


LOG_LEVEL_SEVERITY: dict[LogLevel, int] = {
    LogLevel.DEBUG: 0,
    LogLevel.INFO: 1,
    LogLevel.ERROR: 2,
    LogLevel.WARN: 3,
}


class LogEvent(BaseModel):
    """One buffered log event, delivered to the sink after the request."""

    model_config = ConfigDict(frozen=True)

    level: LogLevel
    message: str
    tags: list[str] = Field(default_factory=list)
    metadata: dict[str, str] = Field(default_factory=dict)
