"""Execution Context — per-request capabilities handed to a contract handler.

Invariants:
    - One context per request, never shared between requests
    - events is append-only; the runner reads it once, at flush time
    - error() never returns: it raises ContractError(message, code)
    - log() raises TypeError on a malformed event, never a pydantic ValidationError
"""

from typing import Any, Mapping, NoReturn

from pydantic import ValidationError

from route_contract.core.errors import ContractError
from route_contract.schemas.log_event import LogEvent


class ExecutionContext:
    """Structured logging + explicit business errors for one request."""

    def __init__(self, events: list[LogEvent] | None = None):
        self.events: list[LogEvent] = events if events is not None else []

    def log(
        self, event: LogEvent | Mapping[str, Any] | None = None, /, **fields: Any,
    ) -> None:
        """Buffer a log event.

        Accepts a LogEvent, a mapping with LogEvent fields, or the fields as
        keyword arguments: ctx.log(level="info", message="hit", tags=["cache"]).

        A malformed event raises TypeError, so it reaches the caller as an
        unexpected error rather than a validation envelope.
        """
        if not isinstance(event, LogEvent):
            try:
                event = LogEvent.model_validate({**(event or {}), **fields})
            except ValidationError as exc:
                raise TypeError(f"Malformed log event: {exc}") from exc
        self.events.append(event)

    def error(self, message: str, code: int = 400) -> NoReturn:
        raise ContractError(message, code)
