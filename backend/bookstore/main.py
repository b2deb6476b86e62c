"""Bookstore API application factory.

create_app() derives the Ed25519 signing key once, wires the error envelope
handlers, and mounts the v1 routes under /v1 plus the configured base path.

Run with: uvicorn bookstore.main:create_app --factory
"""

import logging

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from bookstore.api.v1.router import router as v1_router
from bookstore.core.config import settings
from bookstore.core.errors import APIError, InternalError, ValidationError
from bookstore.core.responses import ErrorResponse
from bookstore.core.secrets_provider import EnvSecrets, SecretsProvider
from bookstore.core.tokens import SigningKeyPair, TokenIssuer

logger = structlog.get_logger()

_SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    # Bodies carry tokens and order data
    "Cache-Control": "no-store, max-age=0",
    "Content-Security-Policy": "default-src 'none'; frame-ancestors 'none'",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Stamp fixed security headers on every response.

    Strict-Transport-Security is added only in production, where TLS is
    terminated by the reverse proxy.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        response = await call_next(request)
        response.headers.update(_SECURITY_HEADERS)
        if settings.environment == "production":
            response.headers["Strict-Transport-Security"] = (
                "max-age=31536000; includeSubDomains"
            )
        return response


def _error_json(exc: APIError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse.from_error(exc).model_dump(),
    )


def api_error_handler(_request: Request, exc: APIError) -> JSONResponse:
    """Render one of the four service error kinds."""
    return _error_json(exc)


def validation_error_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render request-body validation failures as 400 VALIDATION_ERROR.

    Only location, message, and type are kept from each pydantic error;
    the rejected input value is never echoed.
    """
    details = [
        {"loc": list(err["loc"]), "msg": err["msg"], "type": err["type"]}
        for err in exc.errors()
    ]
    return _error_json(ValidationError(details=details))


def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log an unhandled exception and answer with a generic 500.

    The client sees INTERNAL_ERROR only; the traceback stays in the logs.
    """
    logger.exception("unhandled_exception", exc_info=exc, path=request.url.path)
    return _error_json(InternalError())


def create_app(secrets: SecretsProvider | None = None) -> FastAPI:
    """Build the application.

    The signing key is derived here and held on app.state for the lifetime
    of the app, so a bad seed fails at startup rather than at first login.

    Args:
        secrets: Source of the hex signing seed. Defaults to EnvSecrets.

    Returns:
        Configured FastAPI application.

    Raises:
        ValueError: If the signing seed is not 32 hex-encoded bytes.
    """
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    secrets = secrets or EnvSecrets()
    key_pair = SigningKeyPair.from_seed_hex(secrets.get_auth_key())

    app = FastAPI(
        title="Bookstore API",
        version="1.0.0",
        description="Registration, token login, catalog, and orders",
    )
    app.state.token_issuer = TokenIssuer(key_pair)

    app.add_middleware(SecurityHeadersMiddleware)

    # Specific handlers before the catch-all
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, internal_error_handler)

    prefix = f"/v1{settings.base_path}"
    app.include_router(v1_router, prefix=prefix)

    @app.get(f"{prefix}/health", tags=["health"])
    def health_check() -> dict:
        """Liveness probe. No database access."""
        return {"status": "healthy"}

    logger.info("app_created", prefix=prefix, environment=settings.environment)
    return app
