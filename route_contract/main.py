"""App Factory — FastAPI application preconfigured for contract endpoints.

Invariants:
    - Routes are registered by the caller (no auto-discovery)
    - Logging set up and the log sink configured once, at startup, via lifespan
    - Global error handlers give non-contract routes the same envelope shape
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from route_contract.api.error_handlers import register_error_handlers
from route_contract.config import Settings, get_settings
from route_contract.infrastructure.log_sink import LoggingFunction, configure_sink
from route_contract.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


def create_app(
    sink: LoggingFunction | None = None,
    settings: Settings | None = None,
    **fastapi_kwargs,
) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup/shutdown lifecycle."""
        setup_logging(settings.log_level, settings.log_format)
        if sink is not None:
            configure_sink(sink)
        logger.info("Contract app started")
        yield
        logger.info("Contract app shutting down")

    app = FastAPI(lifespan=lifespan, **fastapi_kwargs)
    register_error_handlers(app, settings)
    return app
