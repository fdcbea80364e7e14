"""Exception handlers with request_id in responses."""

from asgi_correlation_id import correlation_id
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.portfolio.core.config import Settings
from src.portfolio.core.logging import get_logger
from src.portfolio.models import to_iso, utc_now

logger = get_logger(__name__)


def _error_response(status_code: int, detail: object, **extra: object) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "detail": detail,
            "request_id": correlation_id.get(),
            **extra,
        },
    )


def setup_exception_handlers(app: FastAPI, settings: Settings) -> None:
    """Configure exception handlers that include request_id in responses."""

    @app.exception_handler(StarletteHTTPException)
    async def starlette_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        # Unmatched routes carry the requested path so clients can tell them apart
        if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
            return _error_response(exc.status_code, "Route not found", path=request.url.path)
        return _error_response(exc.status_code, exc.detail)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return _error_response(exc.status_code, exc.detail)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.info(
            "Request validation failed",
            path=request.url.path,
            error_count=len(exc.errors()),
        )
        return _error_response(status.HTTP_400_BAD_REQUEST, jsonable_encoder(exc.errors()))

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        request_id = correlation_id.get()
        logger.exception(
            "Unhandled exception",
            exc_info=exc,
            request_id=request_id,
            path=request.url.path,
        )
        # Exception text is only exposed outside production
        detail = "Internal server error" if settings.app_env == "production" else str(exc)
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail,
            timestamp=to_iso(utc_now()),
        )
