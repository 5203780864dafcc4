"""Exception handlers for the profiling API.

Every failed request gets the same JSON body::

    {"timestamp": ..., "status": ..., "error": ..., "message": ..., "path": ...}

Client errors are logged at warning level; server and database errors are
logged at error level with the traceback. Driver and internal messages are
never returned to the client.
"""

from http import HTTPStatus
from typing import Any, Optional, Sequence

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.api.middleware.request_id import REQUEST_ID_HEADER, get_request_id
from src.utils.datetime_utils import format_datetime_iso, utc_now
from src.utils.exceptions import ProfilingError, handle_exception_chain
from src.utils.logger import get_logger

logger = get_logger(__name__)

DATABASE_ERROR_MESSAGE = "Database operation failed"
INTERNAL_ERROR_MESSAGE = "An unexpected error occurred"


def reason_phrase(status_code: int) -> str:
    """HTTP reason phrase for a status code, e.g. ``Not Found``."""
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Error"


def _request_id(request: Request) -> Optional[str]:
    return getattr(request.state, "request_id", None) or get_request_id()


def build_error_response(
    request: Request,
    status_code: int,
    error: str,
    message: str,
) -> JSONResponse:
    """Create the error body for a failed request.

    Args:
        request: The failed request
        status_code: HTTP status code
        error: Short error label
        message: Human-readable message

    Returns:
        JSONResponse: Error response
    """
    response = JSONResponse(
        status_code=status_code,
        content={
            "timestamp": format_datetime_iso(utc_now()),
            "status": status_code,
            "error": error,
            "message": message,
            "path": request.url.path,
        },
    )

    request_id = _request_id(request)
    if request_id:
        response.headers[REQUEST_ID_HEADER] = request_id
    return response


def format_validation_errors(errors: Sequence[Any]) -> str:
    """Render the first validation error as ``"<field>: <message>"``."""
    if not errors:
        return "Validation failed"

    first = errors[0]
    location = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    message = first.get("msg", "Invalid value")
    if not location:
        return message
    return f"{'.'.join(location)}: {message}"


async def profiling_error_handler(request: Request, exc: ProfilingError) -> JSONResponse:
    """Handle application exceptions using their own status code."""
    log_extra = {
        "request_id": _request_id(request),
        "error_type": exc.__class__.__name__,
        "error_code": exc.error_code,
        "status_code": exc.status_code,
        "path": request.url.path,
        "method": request.method,
        "details": exc.details,
    }

    if exc.is_client_error:
        logger.warning(f"Application error: {exc.message}", extra=log_extra)
    else:
        log_extra["exception_chain"] = handle_exception_chain(exc)
        logger.error(f"Application error: {exc.message}", extra=log_extra, exc_info=exc)

    return build_error_response(request, exc.status_code, reason_phrase(exc.status_code), exc.message)


async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
    """Handle illegal arguments raised outside the application taxonomy."""
    logger.warning(
        f"Illegal argument: {str(exc)}",
        extra={"path": request.url.path, "method": request.method}
    )
    return build_error_response(request, status.HTTP_400_BAD_REQUEST, "IllegalArgument", str(exc))


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle request body, query and path validation errors."""
    errors = exc.errors()
    message = format_validation_errors(errors)

    logger.warning(
        f"Validation error: {message}",
        extra={
            "path": request.url.path,
            "method": request.method,
            "error_count": len(errors),
        }
    )
    return build_error_response(request, status.HTTP_400_BAD_REQUEST, "ValidationError", message)


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Handle framework HTTP exceptions such as unknown routes."""
    logger.warning(
        f"HTTP exception: {exc.detail}",
        extra={"status_code": exc.status_code, "path": request.url.path}
    )

    response = build_error_response(
        request, exc.status_code, reason_phrase(exc.status_code), str(exc.detail)
    )
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def database_exception_handler(request: Request, exc: PyMongoError) -> JSONResponse:
    """Handle MongoDB driver errors without leaking the driver message."""
    logger.error(
        f"Database error: {str(exc)}",
        extra={
            "exception_type": type(exc).__name__,
            "path": request.url.path,
            "method": request.method,
        },
        exc_info=exc,
    )
    return build_error_response(
        request, status.HTTP_503_SERVICE_UNAVAILABLE, "DatabaseError", DATABASE_ERROR_MESSAGE
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle uncaught exceptions."""
    logger.error(
        f"Unhandled exception: {str(exc)}",
        extra={
            "exception_type": type(exc).__name__,
            "path": request.url.path,
            "method": request.method,
        },
        exc_info=exc,
    )
    return build_error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "InternalServerError",
        INTERNAL_ERROR_MESSAGE,
    )


def register_exception_handlers(app: FastAPI) -> FastAPI:
    """Register the exception handlers on the application.

    Args:
        app: FastAPI application instance

    Returns:
        FastAPI: Application with exception handlers registered
    """
    app.add_exception_handler(ProfilingError, profiling_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(PyMongoError, database_exception_handler)
    app.add_exception_handler(ValueError, value_error_handler)
    app.add_exception_handler(Exception, general_exception_handler)
    return app


__all__ = [
    "build_error_response",
    "format_validation_errors",
    "reason_phrase",
    "register_exception_handlers",
]
