"""
API error handling utilities.

Maps the domain error taxonomy onto HTTP responses. Routes use the
``handle_service_errors`` decorator; errors raised while resolving
dependencies (bearer token checks) reach the application-level handler
registered by ``register_error_handlers``. Both produce the same body:

    {"detail": {"kind": ..., "message": ..., "details": {...}}}
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse

from backend.core.exceptions import (
    Conflict,
    Forbidden,
    NotFound,
    PdfShareError,
    StoreUnavailable,
    Unauthenticated,
    Unauthorized,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Type for the decorated function
F = TypeVar("F", bound=Callable[..., Any])

_STATUS_BY_ERROR: list[tuple[type[PdfShareError], int]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (Conflict, status.HTTP_400_BAD_REQUEST),
    (Unauthenticated, status.HTTP_401_UNAUTHORIZED),
    (Unauthorized, status.HTTP_403_FORBIDDEN),
    (Forbidden, status.HTTP_403_FORBIDDEN),
    (NotFound, status.HTTP_404_NOT_FOUND),
    (StoreUnavailable, status.HTTP_500_INTERNAL_SERVER_ERROR),
]


def status_for(error: PdfShareError) -> int:
    """HTTP status code for a domain error."""
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _headers_for(error: PdfShareError) -> dict[str, str] | None:
    if isinstance(error, Unauthenticated):
        return {"WWW-Authenticate": "Bearer"}
    return None


def _log(error: PdfShareError, status_code: int) -> None:
    extra = {"kind": error.kind, "status_code": status_code, "error": error.message}
    if status_code >= 500:
        logger.error("Service operation failed", extra={**extra, "details": error.details})
    else:
        logger.warning("Request rejected", extra=extra)


def to_http_exception(error: PdfShareError) -> HTTPException:
    """Convert a domain error into an HTTPException with the error body."""
    status_code = status_for(error)
    _log(error, status_code)
    return HTTPException(
        status_code=status_code,
        detail=error.to_dict(),
        headers=_headers_for(error),
    )


def handle_service_errors(func: F) -> F:
    """
    Decorator to handle service errors and transform them into HTTPExceptions.

    This centralizes:
    - Logging of errors with their kind
    - Mapping taxonomy errors to HTTP status codes
    - Ensuring uniform error response formats
    """

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except PdfShareError as e:
            raise to_http_exception(e) from e

        except HTTPException:
            raise

        except Exception as e:
            logger.exception(
                "Unexpected failure in service operation",
                extra={"error": str(e), "error_type": type(e).__name__},
            )
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail={
                    "kind": "internal_error",
                    "message": "An internal error occurred",
                    "details": {},
                },
            ) from e

    return wrapper  # type: ignore


async def _domain_error_handler(request: Request, exc: PdfShareError) -> JSONResponse:
    http_error = to_http_exception(exc)
    return JSONResponse(
        status_code=http_error.status_code,
        content={"detail": http_error.detail},
        headers=http_error.headers,
    )


def register_error_handlers(app: FastAPI) -> None:
    """Handle domain errors raised outside decorated routes (dependencies)."""
    app.add_exception_handler(PdfShareError, _domain_error_handler)
