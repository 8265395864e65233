"""Domain errors and exception handlers with request_id in responses."""

from asgi_correlation_id import correlation_id
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.app.core.logging import get_logger

logger = get_logger(__name__)


class AppError(Exception):
    """Base class for errors raised by services and mapped to HTTP responses."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    default_detail: str = "Bad request"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Access denied"


class UnauthenticatedError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Not authenticated"


class InputValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid input"


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Conflict"


def _error_response(
    status_code: int, detail: object, headers: dict[str, str] | None = None
) -> JSONResponse:
    """JSON error body; every error carries the request's correlation id."""
    return JSONResponse(
        status_code=status_code,
        content={"detail": detail, "request_id": correlation_id.get()},
        headers=headers,
    )


def _validation_errors(exc: RequestValidationError) -> list[dict[str, object]]:
    """Keep loc/msg/type only; pydantic's ``ctx`` and ``input`` may not serialize."""
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]


def setup_exception_handlers(app: FastAPI) -> None:
    """Map domain, HTTP, validation and unexpected errors to JSON responses."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        challenge = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthenticatedError) else None
        return _error_response(exc.status_code, exc.detail, challenge)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return _error_response(status.HTTP_422_UNPROCESSABLE_ENTITY, _validation_errors(exc))

    # Also catches fastapi.HTTPException, which subclasses Starlette's
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return _error_response(exc.status_code, exc.detail, getattr(exc, "headers", None))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "Unhandled exception",
            exc_info=exc,
            method=request.method,
            path=request.url.path,
        )
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")
