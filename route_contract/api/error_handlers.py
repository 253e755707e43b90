"""Error Handlers — envelope-shaped global handlers for routes outside contract().

Invariants:
    - RequestValidationError -> 400, one message per issue (same rendering as contracts)
    - ContractError          -> 200, [message]  (code not surfaced, as in contracts)
    - Exception (catch-all)  -> 500, generic message, never leaks internal details
    - Contract endpoints never reach these handlers: they build their own envelopes

Design Decisions:
    - Three-layer handler: domain (ContractError), validation (FastAPI), catch-all
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from route_contract.config import Settings, get_settings
from route_contract.core.errors import (
    ContractError,
    ShapeValidationError,
    issues_from_error_dicts,
)
from route_contract.core.validation_messages import validation_error_messages
from route_contract.schemas.envelope import Envelope

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI, settings: Settings | None = None) -> None:
    """Register all global error handlers on the FastAPI app."""
    settings = settings or get_settings()
    _register_contract_error_handler(app)
    _register_validation_error_handler(app, settings)
    _register_generic_error_handler(app, settings)


def _register_contract_error_handler(app: FastAPI) -> None:

    @app.exception_handler(ContractError)
    async def contract_error_handler(request: Request, exc: ContractError):
        logger.info(
            f"ContractError on {request.url.path}: {exc.message}",
            extra={"route": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_200_OK,
            content=Envelope.failure([exc.message]).to_response(),
        )


def _register_validation_error_handler(app: FastAPI, settings: Settings) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"route": request.url.path},
        )
        error = ShapeValidationError(issues_from_error_dicts(exc.errors()))
        messages = validation_error_messages(
            error,
            prefix=settings.validation_error_prefix,
            separator=settings.validation_issue_separator,
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=Envelope.failure(messages).to_response(),
        )


def _register_generic_error_handler(app: FastAPI, settings: Settings) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            extra={"route": request.url.path, "error_type": type(exc).__name__},
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=Envelope.failure(
                [settings.unexpected_error_message],
            ).to_response(),
        )
