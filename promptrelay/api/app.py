"""FastAPI application factory and configuration.

Main application entry point with lifespan management, middleware,
error handlers, and router registration.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from promptrelay.api.routes import router as relay_router
from promptrelay.models.schemas import ErrorDetail, ErrorKind
from promptrelay.relay.config import RelayConfig, get_relay_config

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application startup and shutdown lifecycle.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.
    """
    logger.info("Starting prompt relay API...")
    yield
    logger.info("Shutting down prompt relay API...")


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report request validation failures as ``invalid_input``."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{field or 'body'}: {first.get('msg', 'invalid value')}"
    else:
        message = "Invalid request"

    logger.info(f"Rejected request to {request.url.path}: {message}")
    detail = ErrorDetail(kind=ErrorKind.INVALID_INPUT, message=message)
    return JSONResponse(
        status_code=422,
        content={"detail": detail.model_dump(mode="json")},
    )


def create_app(config: RelayConfig | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Optional relay configuration.
                Loads from environment if not provided.

    Returns:
        Configured FastAPI application instance.
    """
    config = config or get_relay_config()

    application = FastAPI(
        title="Prompt Relay API",
        description=(
            "Relays chat prompts to a hosted text-generation provider and "
            "returns the concatenated answer."
        ),
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=[config.allowed_origin],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
    )

    application.add_exception_handler(RequestValidationError, validation_error_handler)
    application.include_router(relay_router)

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Check service health status."""
        return {"status": "healthy", "service": "promptrelay"}

    return application


app = create_app()
