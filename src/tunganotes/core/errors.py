"""
Error kinds raised by the services and their mapping to HTTP responses.

Services raise a ``NotesError`` subclass; the handlers registered by
``register_exception_handlers`` translate it once, at the request boundary,
into the fixed ``{"message": ...}`` JSON bodies the API exposes.
"""

from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse, JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..config import get_settings
from .logging import get_logger

logger = get_logger("errors")

ROUTE_NOT_FOUND = "Route not found"
INTERNAL_ERROR = "Something went wrong!"
INVALID_REQUEST = "Invalid request data"


class ErrorKind(str, Enum):
    """Failure categories a request can end in."""

    UNAUTHENTICATED = "unauthenticated"
    INVALID_INPUT = "invalid_input"
    NOT_FOUND = "not_found"
    STORE_ERROR = "store_error"

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self]


_STATUS_CODES = {
    ErrorKind.UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.STORE_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class NotesError(Exception):
    """Base application error. ``message`` is safe to show to clients."""

    kind: ErrorKind = ErrorKind.STORE_ERROR
    default_message = INTERNAL_ERROR

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return self.kind.status_code


class Unauthenticated(NotesError):
    kind = ErrorKind.UNAUTHENTICATED
    default_message = "Not authorized"


class InvalidInput(NotesError):
    kind = ErrorKind.INVALID_INPUT
    default_message = "Please provide title and content"


class NotFound(NotesError):
    kind = ErrorKind.NOT_FOUND
    default_message = "Note not found"


class StoreError(NotesError):
    """The persistence layer failed; the original exception is chained as ``__cause__``."""

    kind = ErrorKind.STORE_ERROR
    default_message = "Database error"


def error_body(message: str, detail: Any = None, *, detail_key: str = "error") -> Dict[str, Any]:
    """Build a response body, attaching ``detail`` only in development."""
    body: Dict[str, Any] = {"message": message}
    if detail is not None and get_settings().is_development:
        body[detail_key] = detail
    return body


async def notes_error_handler(request: Request, exc: NotesError) -> JSONResponse:
    headers = None
    detail = None

    if exc.kind is ErrorKind.STORE_ERROR:
        cause = exc.__cause__ or exc
        logger.error(
            exc.message,
            exc_info=(type(cause), cause, cause.__traceback__),
            extra={"method": request.method, "path": request.url.path},
        )
        detail = str(cause)
    elif exc.kind is ErrorKind.UNAUTHENTICATED:
        headers = {"WWW-Authenticate": "Bearer"}
        logger.info("Rejected unauthenticated request", extra={"path": request.url.path})

    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.message, detail),
        headers=headers,
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    # Unknown paths and unsupported methods both answer "Route not found"
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        index = _spa_index(request)
        if index is not None:
            return FileResponse(index)
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND, content={"message": ROUTE_NOT_FOUND}
        )

    message = exc.detail if isinstance(exc.detail, str) else INTERNAL_ERROR
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": message},
        headers=getattr(exc, "headers", None),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")} for err in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(INVALID_REQUEST, errors, detail_key="errors"),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled exception",
        exc_info=exc,
        extra={"method": request.method, "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(INTERNAL_ERROR, str(exc)),
    )


def _spa_index(request: Request) -> Optional[Path]:
    """Path of the SPA entry point when a client-side route should fall back to it."""
    settings = getattr(request.app.state, "settings", None) or get_settings()
    if not settings.spa_dist_dir or not settings.is_production:
        return None
    if request.method != "GET" or request.url.path.startswith("/api"):
        return None

    index = Path(settings.spa_dist_dir) / "index.html"
    return index if index.is_file() else None


def register_exception_handlers(app: FastAPI) -> None:
    """Map every error kind to its HTTP shape."""
    app.add_exception_handler(NotesError, notes_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
