"""
loyalty_bff.api.app

FastAPI app factory for the loyalty customer BFF.

Responsibilities:
- Build the FastAPI application and register routers, middleware and error handlers.
- Open and close the downstream httpx clients around the app lifespan.
- Build the password validator once from settings.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.status import HTTP_422_UNPROCESSABLE_ENTITY

from loyalty_bff import __version__
from loyalty_bff.api.routers.dev_auth import router as dev_auth_router
from loyalty_bff.api.routers.health import router as health_router
from loyalty_bff.api.routers.passwords import router as passwords_router
from loyalty_bff.api.routers.smart_vouchers import router as smart_vouchers_router
from loyalty_bff.clients.transport import build_http_client
from loyalty_bff.errors import ApiError, ApiErrorCode
from loyalty_bff.observability.logging import configure_logging, get_logger
from loyalty_bff.observability.middleware import RequestContextMiddleware
from loyalty_bff.services.password_validator import PasswordValidator
from loyalty_bff.settings import Settings

log = get_logger(__name__)


def create_app(
    *,
    settings: Settings,
    downstream_transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    configure_logging(
        service_name=settings.service_name, env=settings.env, level=settings.log_level
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        timeout = settings.downstream_timeout_seconds
        app.state.partner_management_http = build_http_client(
            base_url=settings.partner_management_url,
            timeout=timeout,
            transport=downstream_transport,
        )
        app.state.smart_vouchers_http = build_http_client(
            base_url=settings.smart_vouchers_url,
            timeout=timeout,
            transport=downstream_transport,
        )
        app.state.payment_management_http = build_http_client(
            base_url=settings.payment_management_url,
            timeout=timeout,
            transport=downstream_transport,
        )
        try:
            yield
        finally:
            await app.state.partner_management_http.aclose()
            await app.state.smart_vouchers_http.aclose()
            await app.state.payment_management_http.aclose()
            log.info("shutdown")

    app = FastAPI(
        title="Loyalty Customer BFF",
        version=__version__,
        docs_url=None if settings.env == "prod" else "/docs",
        openapi_url=None if settings.env == "prod" else "/openapi.json",
        lifespan=lifespan,
    )

    # Process-wide, read-only after startup.
    app.state.settings = settings
    app.state.password_validator = PasswordValidator(settings.password_rules)

    app.add_middleware(RequestContextMiddleware)
    register_exception_handlers(app)

    app.include_router(health_router, tags=["health"])
    app.include_router(dev_auth_router)
    app.include_router(smart_vouchers_router)
    app.include_router(passwords_router)

    return app


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ApiError)
    async def _api_error(request: Request, exc: ApiError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.to_body())

    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = [
            {
                "field": ".".join(str(loc) for loc in error["loc"]),
                "message": error["msg"],
                "type": error["type"],
            }
            for error in exc.errors()
        ]
        return JSONResponse(
            status_code=HTTP_422_UNPROCESSABLE_ENTITY,
            content={
                "error": ApiErrorCode.model_validation_failed.value,
                "message": "Request validation failed",
                "errors": errors,
            },
        )


# --- Module Notes -----------------------------------------------------------
# Unmapped exceptions (downstream HTTP failures, unexpected outcome codes) are left to
# Starlette's default 500 handling so they show up as server faults.
