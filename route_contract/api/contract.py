"""Contract Endpoints — bind a ContractSpec to Starlette/FastAPI requests.

Invariants:
    - Every response is an Envelope serialized as JSON, HTTP 200, whatever the outcome
    - The request's events are flushed after the body is sent, within the same
      ASGI call (Starlette BackgroundTask): request complete => logs delivered
    - Query keys that repeat become lists; single keys stay strings
    - Headers reach validators as a lowercase-keyed dict

Design Decisions:
    - Endpoint takes only the Request, so it registers with app.add_api_route(),
      @app.get(...)(endpoint) or a plain starlette Route alike
    - Body: empty -> None, JSON content types decoded (undecodable JSON falls back
      to text), anything else -> text
"""

import json
import logging
from typing import Any, Awaitable, Callable

from fastapi import Request
from fastapi.responses import Response
from starlette.background import BackgroundTask

from route_contract.config import Settings
from route_contract.infrastructure.log_sink import LoggingFunction
from route_contract.services.contract_runner import (
    ContractRunner,
    ContractSpec,
    Handler,
    RawRequest,
)

logger = logging.getLogger(__name__)

Endpoint = Callable[[Request], Awaitable[Response]]


def contract(
    *,
    handler: Handler,
    query: Any = None,
    params: Any = None,
    body: Any = None,
    headers: Any = None,
    result: Any = None,
    on_unexpected_error: Callable[[Exception], Awaitable[None]] | None = None,
    before_response: Callable[[Any], Awaitable[None]] | None = None,
    sink: LoggingFunction | None = None,
    settings: Settings | None = None,
) -> Endpoint:
    """Build a request endpoint from keyword contract parts.

    Example:
        app.add_api_route("/items/{id}", contract(
            params=ItemParams, result=Item, handler=get_item,
        ), methods=["GET"])
    """
    spec = ContractSpec(
        handler=handler, query=query, params=params, body=body,
        headers=headers, result=result,
        on_unexpected_error=on_unexpected_error,
        before_response=before_response,
    )
    return build_endpoint(spec, sink=sink, settings=settings)


def build_endpoint(
    spec: ContractSpec,
    sink: LoggingFunction | None = None,
    settings: Settings | None = None,
) -> Endpoint:
    runner = ContractRunner(spec, sink=sink, settings=settings)

    async def endpoint(request: Request) -> Response:
        raw = await read_raw_request(request)
        outcome = await runner.handle(raw)
        return Response(
            outcome.body, media_type="application/json",
            background=BackgroundTask(runner.flush, outcome.events),
        )

    endpoint.__name__ = getattr(spec.handler, "__name__", "contract_endpoint")
    endpoint.__doc__ = spec.handler.__doc__
    return endpoint


async def read_raw_request(request: Request) -> RawRequest:
    """Collect the four unvalidated request channels."""
    query: dict[str, Any] = {}
    for key in request.query_params.keys():
        values = request.query_params.getlist(key)
        query[key] = values if len(values) > 1 else values[0]
    return RawRequest(
        query=query,
        params=dict(request.path_params),
        body=await _read_body(request),
        headers=dict(request.headers),
    )


async def _read_body(request: Request) -> Any:
    raw = await request.body()
    if not raw:
        return None
    text = raw.decode("utf-8", errors="replace")
    if "json" in request.headers.get("content-type", ""):
        try:
            return json.loads(raw)
        except ValueError:
            logger.debug("Undecodable JSON body; passing raw text")
    return text
