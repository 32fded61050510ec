"""
FastAPI Application Factory.
Creates and configures the FastAPI application with all routers, middleware, and DI.

Error envelope for every failed request:
    {"success": false, "message": "..."}
"""

import logging
from contextlib import asynccontextmanager

from dishka import AsyncContainer
from dishka.integrations.fastapi import setup_dishka
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from chatto.config.logging_config import correlation_id_var, setup_logging
from chatto.config.settings import Config
from chatto.domain.exceptions import (
    AccessDeniedError,
    ConflictError,
    DomainValidationError,
    EntityNotFoundError,
    StoreError,
    UnauthenticatedError,
)
from chatto.observability.metrics import MetricsErrorType, increment_error
from chatto.presentation.api import (
    auth_router,
    chats_router,
    metrics_router,
    realtime_router,
)

logger = logging.getLogger(__name__)

# Domain exception → HTTP status
DOMAIN_ERROR_STATUS = {
    DomainValidationError: 400,
    UnauthenticatedError: 401,
    AccessDeniedError: 403,
    EntityNotFoundError: 404,
    ConflictError: 409,
}


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Middleware to extract and set correlation ID from request headers."""

    async def dispatch(self, request: Request, call_next):
        correlation_id = request.headers.get("X-Correlation-ID", "NO Correlation ID")

        # Set in contextvars (propagates to async tasks and logging)
        correlation_id_var.set(correlation_id)

        response = await call_next(request)
        response.headers["X-Correlation-ID"] = correlation_id
        return response


def _error(status_code: int, message) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content={"success": False, "message": message}
    )


def create_fastapi_app(container: AsyncContainer) -> FastAPI:
    """
    Application factory for creating FastAPI app.

    Args:
        container: Dishka container built by chatto.setup.ioc.create_container;
            closed when the app shuts down.
    """
    setup_logging(Config.LOG_LEVEL, Config.LOG_PATH or None)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Chat server started (store: {Config.CHAT_STORE})")
        yield
        await container.close()
        logger.info("Chat server shutdown. DI container closed.")

    app = FastAPI(
        title="Chatto API",
        description="Realtime multi-user chat backend",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Setup Dishka BEFORE app starts (must add middleware before startup)
    setup_dishka(container, app)

    app.add_middleware(CorrelationIdMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=Config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        logger.info(f"[VALIDATION ERROR] {request.method} {request.url.path}: {errors}")
        first = errors[0] if errors else {}
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = first.get("msg", "Invalid request")
        return _error(400, f"{location}: {message}" if location else message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        logger.info(f"[HTTP ERROR {exc.status_code}] {exc.detail}")
        return _error(exc.status_code, exc.detail)

    for error_type, status_code in DOMAIN_ERROR_STATUS.items():

        async def domain_exception_handler(
            request: Request, exc: Exception, status_code: int = status_code
        ):
            logger.info(f"[{type(exc).__name__}] {request.method} {request.url.path}: {exc}")
            return _error(status_code, str(exc))

        app.add_exception_handler(error_type, domain_exception_handler)

    @app.exception_handler(StoreError)
    async def store_exception_handler(request: Request, exc: StoreError):
        logger.error(f"[STORE ERROR] {request.method} {request.url.path}: {exc}")
        increment_error(MetricsErrorType.STORE_FAILED)
        return _error(500, "Server error")

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.exception(f"[GLOBAL ERROR] {type(exc).__name__}: {exc}")
        increment_error(MetricsErrorType.UNHANDLED)
        return _error(500, "Server error")

    @app.get("/", tags=["health"])
    async def root():
        return {"message": "Chat server is running."}

    @app.get("/health", tags=["health"])
    async def health():
        return {"status": "healthy"}

    app.include_router(auth_router)
    app.include_router(chats_router)
    app.include_router(realtime_router)
    app.include_router(metrics_router)

    return app
