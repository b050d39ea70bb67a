from collections.abc import Mapping, Sequence
from typing import Any, ClassVar
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.status import (
    HTTP_403_FORBIDDEN,
    HTTP_404_NOT_FOUND,
    HTTP_405_METHOD_NOT_ALLOWED,
    HTTP_422_UNPROCESSABLE_CONTENT,
    HTTP_500_INTERNAL_SERVER_ERROR,
)
from pydantic import BaseModel

from app.core.logging import get_logger


class AppError(Exception):
    """Base for errors surfaced to the client as `{"error": <kind>, ...}`."""

    status_code: ClassVar[int] = HTTP_500_INTERNAL_SERVER_ERROR
    error: ClassVar[str] = "ServerError"
    default_message: ClassVar[str] = "Internal Server Error"

    def __init__(self, message: str | None = None):
        self.message: str = message or self.default_message
        super().__init__(self.message)


class NotFoundError(AppError):
    status_code = HTTP_404_NOT_FOUND
    error = "NotFoundError"
    default_message = "Resource not found"


class AuthorNotFoundError(NotFoundError):
    error = "AuthorNotFoundError"
    default_message = "The id of the Author was not found."

    def __init__(self, author_id: int):
        self.author_id: int = author_id
        super().__init__(f"Author {author_id} not found")


class ValidationError(AppError):
    status_code = HTTP_422_UNPROCESSABLE_CONTENT
    error = "ValidationError"
    default_message = "The given data was invalid."

    def __init__(self, fields: Mapping[str, list[str]], message: str | None = None):
        self.fields: dict[str, list[str]] = {k: list(v) for k, v in fields.items()}
        super().__init__(message)


class ForbiddenAccessError(AppError):
    status_code = HTTP_403_FORBIDDEN
    error = "ForbiddenAccessError"
    default_message = "You are not authorized to access this page"


class MethodNotAllowedError(AppError):
    status_code = HTTP_405_METHOD_NOT_ALLOWED
    error = "MethodNotAllowedError"
    default_message = "Method Not Allowed"


# Framework-raised HTTP errors mapped onto the same error kinds
_HTTP_ERROR_KINDS: dict[int, type[AppError]] = {
    HTTP_403_FORBIDDEN: ForbiddenAccessError,
    HTTP_404_NOT_FOUND: NotFoundError,
    HTTP_405_METHOD_NOT_ALLOWED: MethodNotAllowedError,
}

_LOCATION_PREFIXES = ("body", "path", "query", "header", "cookie")


class ErrorEnvelope(BaseModel):
    """Structured error body."""
    error: str
    message: str
    fields: dict[str, list[str]] | None = None
    meta: dict[str, object]


def _build_meta(request: Request) -> dict[str, object]:
    """Collect metadata for error responses."""
    return {
        "request_id": getattr(request.state, "correlation_id", "-"),
        "path": request.url.path,
        "method": request.method,
    }


def _field_name(loc: Sequence[Any]) -> str:
    parts = list(loc)
    if parts and parts[0] in _LOCATION_PREFIXES:
        parts = parts[1:]
    return ".".join(str(p) for p in parts) or "body"


def _field_message(field: str, error: Mapping[Any, Any]) -> str:
    error_type = error.get("type")
    ctx = error.get("ctx")

    if error_type == "missing":
        return f"The {field} field is required."
    if error_type == "string_type":
        return f"The {field} must be a string."
    # Custom validators raise ValueError with the final message
    if error_type == "value_error" and isinstance(ctx, Mapping) and "error" in ctx:
        return str(ctx["error"])
    return str(error.get("msg", "Invalid value"))


def field_messages(errors: Sequence[Mapping[Any, Any]]) -> dict[str, list[str]]:
    """Group pydantic/FastAPI validation errors into `{field: [messages]}`."""

    messages: dict[str, list[str]] = {}
    for error in errors:
        # json_invalid locs end in a character offset, not a field
        if error.get("type") == "json_invalid":
            field = "body"
        else:
            field = _field_name(error.get("loc", ()))
        message = _field_message(field, error)
        bucket = messages.setdefault(field, [])
        if message not in bucket:
            bucket.append(message)
    return messages


def _error_response(request: Request, exc: AppError) -> JSONResponse:
    body = ErrorEnvelope(
        error=exc.error,
        message=exc.message,
        fields=getattr(exc, "fields", None),
        meta=_build_meta(request),
    )
    return JSONResponse(
        status_code=exc.status_code, content=body.model_dump(exclude_none=True)
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register centralized exception."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        logger = get_logger(__name__, request)
        logger.warning(
            "%s: %s", exc.error, exc.message, extra={"status_code": exc.status_code}
        )
        return _error_response(request, exc)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        logger = get_logger(__name__, request)
        logger.warning("HTTP error", extra={"status_code": exc.status_code})

        kind = _HTTP_ERROR_KINDS.get(exc.status_code)
        if kind is not None:
            error = kind.error
            message = kind.default_message
        else:
            error = "HTTPError"
            message = str(exc.detail) if exc.detail else "HTTP error"

        body = ErrorEnvelope(error=error, message=message, meta=_build_meta(request))
        return JSONResponse(
            status_code=exc.status_code,
            content=body.model_dump(exclude_none=True),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger = get_logger(__name__, request)
        logger.info("Validation error")
        return _error_response(request, ValidationError(field_messages(exc.errors())))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger = get_logger(__name__, request)
        logger.exception("Unhandled server error", exc_info=exc)
        return _error_response(request, AppError())
