"""Contract Runner — validation-and-dispatch for one endpoint contract.

Invariants:
    - Inputs validated in fixed order query -> params -> body -> headers; the first
      failing channel ends validation, later validators are never invoked
    - The handler never runs when any input fails validation
    - Exactly one envelope per request:
        shape error   -> ok=False, one message per issue
        ContractError -> ok=False, [message]  (code not surfaced)
        other error   -> ok=False, [generic message]; on_unexpected_error called once
        success       -> ok=True, data=result unchanged
    - Hook and sink failures are logged to the diagnostic logger, never surfaced
    - Events are flushed exactly once per request on every branch, even when empty
    - The result validator (spec.result) is not enforced at runtime
    - The body is rendered to JSON before the envelope is final: a result that
      cannot be serialized takes the unexpected-error branch

Design Decisions:
    - handle() decides, flush() delivers: the HTTP binding sends the body before
      the flush runs; run() offers the same ordering for any other transport
    - Sink resolved at flush time: injected sink first, then the process registry,
      so configure_sink() may run after contracts are built
    - Failures are routed by classify_error(), the single place the three-way
      split lives
    - No retries, no timeouts; asyncio.CancelledError is not caught
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable

from pydantic import ValidationError

from route_contract.config import Settings, get_settings
from route_contract.core.context import ExecutionContext
from route_contract.core.errors import (
    ErrorCategory,
    ShapeValidationError,
    classify_error,
)
from route_contract.core.validation_messages import validation_error_messages
from route_contract.infrastructure.log_sink import LoggingFunction, current_sink
from route_contract.schemas.envelope import Envelope
from route_contract.schemas.log_event import LogEvent
from route_contract.services.shape_validators import (
    DEFAULT_HEADERS_VALIDATOR,
    as_validator,
    run_validator,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContractInputs:
    """Parsed inputs passed to the handler."""
    query: Any
    params: Any
    body: Any
    headers: Any


@dataclass(frozen=True)
class RawRequest:
    """Unvalidated request fields as read from the transport."""
    query: Any = None
    params: Any = None
    body: Any = None
    headers: Any = field(default_factory=dict)


Handler = Callable[[ContractInputs, ExecutionContext], Awaitable[Any]]


@dataclass(frozen=True)
class ContractSpec:
    """Declarative description of one endpoint.

    query/params/body/headers accept any form as_validator() understands.
    result documents the response shape; it is not checked at runtime.
    """
    handler: Handler
    query: Any = None
    params: Any = None
    body: Any = None
    headers: Any = None
    result: Any = None
    on_unexpected_error: Callable[[Exception], Awaitable[None]] | None = None
    before_response: Callable[[Any], Awaitable[None]] | None = None


@dataclass
class ContractOutcome:
    envelope: Envelope
    body: bytes
    events: list[LogEvent] = field(default_factory=list)


class ContractRunner:
    """Runs one ContractSpec against raw requests."""

    def __init__(
        self,
        spec: ContractSpec,
        sink: LoggingFunction | None = None,
        settings: Settings | None = None,
    ):
        self._spec = spec
        self._sink = sink
        self._settings = settings or get_settings()
        self._route = getattr(spec.handler, "__qualname__", repr(spec.handler))
        self._validators = (
            ("query", as_validator(spec.query)),
            ("params", as_validator(spec.params)),
            ("body", as_validator(spec.body)),
            ("headers", as_validator(spec.headers) or DEFAULT_HEADERS_VALIDATOR),
        )

    @property
    def spec(self) -> ContractSpec:
        return self._spec

    async def handle(self, raw: RawRequest) -> ContractOutcome:
        """Validate, dispatch and build the envelope. Does not flush."""
        events: list[LogEvent] = []
        envelope, body = await self._decide(raw, events)
        return ContractOutcome(envelope=envelope, body=body, events=events)

    async def run(
        self, raw: RawRequest, respond: Callable[[Envelope], Awaitable[None]],
    ) -> Envelope:
        """Decide, hand the envelope to respond(), then flush the events."""
        events: list[LogEvent] = []
        try:
            envelope, _ = await self._decide(raw, events)
            await respond(envelope)
        finally:
            await self.flush(events)
        return envelope

    async def flush(self, events: list[LogEvent]) -> None:
        """Deliver a request's events to the sink; sink errors are only logged."""
        sink = self._sink if self._sink is not None else current_sink()
        try:
            await sink(list(events))
        except Exception:
            logger.exception(
                "Error occurred in log sink",
                extra={"route": self._route, "event_count": len(events)},
            )

    # ─── Internals ──────────────────────────────────────────────

    async def _decide(
        self, raw: RawRequest, events: list[LogEvent],
    ) -> tuple[Envelope, bytes]:
        try:
            inputs = await self._validate_inputs(raw)
            ctx = ExecutionContext(events)
            data = await self._spec.handler(inputs, ctx)
            await self._run_before_response(data)
            envelope = Envelope.success(data)
            return envelope, envelope.to_json()
        except Exception as exc:
            envelope = await self._failure_envelope(exc)
            return envelope, envelope.to_json()

    async def _failure_envelope(self, exc: Exception) -> Envelope:
        category = classify_error(exc)
        if category is ErrorCategory.VALIDATION:
            return self._validation_failure(exc)
        if category is ErrorCategory.BUSINESS_RULE:
            return Envelope.failure([exc.message])
        await self._report_unexpected(exc)
        return Envelope.failure([self._settings.unexpected_error_message])

    async def _validate_inputs(self, raw: RawRequest) -> ContractInputs:
        parsed = {}
        for channel, validate in self._validators:
            value = getattr(raw, channel)
            parsed[channel] = (
                await run_validator(validate, value) if validate else value
            )
        return ContractInputs(**parsed)

    def _validation_failure(
        self, exc: ShapeValidationError | ValidationError,
    ) -> Envelope:
        if isinstance(exc, ValidationError):
            exc = ShapeValidationError.from_pydantic(exc)
        return Envelope.failure(validation_error_messages(
            exc,
            prefix=self._settings.validation_error_prefix,
            separator=self._settings.validation_issue_separator,
        ))

    async def _report_unexpected(self, exc: Exception) -> None:
        logger.error(
            f"Unexpected error in contract handler: {exc!r}",
            extra={"route": self._route, "error_type": type(exc).__name__},
            exc_info=exc,
        )
        if self._spec.on_unexpected_error is None:
            return
        try:
            await self._spec.on_unexpected_error(exc)
        except Exception:
            logger.exception(
                "Error occurred in on_unexpected_error hook",
                extra={"route": self._route, "hook": "on_unexpected_error"},
            )

    async def _run_before_response(self, data: Any) -> None:
        if self._spec.before_response is None:
            return
        try:
            await self._spec.before_response(data)
        except Exception:
            logger.exception(
                "Error occurred in before_response hook",
                extra={"route": self._route, "hook": "before_response"},
            )
