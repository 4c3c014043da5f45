"""
Store error translation.

The single place where driver exceptions (botocore, SQLAlchemy, timeouts)
become taxonomy errors. Everything above the boundary layer only ever sees
``backend.core.exceptions`` types.

Dependencies: botocore, sqlalchemy
System role: Store-adapter error boundary
"""

import functools
import inspect
import logging
from typing import Any, Callable, TypeVar

from botocore.exceptions import BotoCoreError, ClientError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from backend.core.exceptions import Conflict, PdfShareError, StoreUnavailable

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

_MISSING_OBJECT_CODES = {"404", "NoSuchKey", "NotFound"}


def is_missing_object(error: ClientError) -> bool:
    """True when an S3 ClientError means the key does not exist."""
    return error.response.get("Error", {}).get("Code") in _MISSING_OBJECT_CODES


def translate_store_error(exc: BaseException, store: str, operation: str) -> PdfShareError:
    """
    Map a driver exception onto the error taxonomy.

    Args:
        exc: Exception raised by a store client
        store: "blob" or "record"
        operation: Operation name for context

    Returns:
        PdfShareError: Conflict for unique-key violations, StoreUnavailable otherwise
    """
    if isinstance(exc, PdfShareError):
        return exc
    if isinstance(exc, IntegrityError):
        return Conflict(
            "Record violates a uniqueness or integrity constraint",
            details={"store": store, "operation": operation},
        )
    if isinstance(exc, ClientError):
        code = exc.response.get("Error", {}).get("Code", "Unknown")
        return StoreUnavailable(
            f"Blob store {operation} failed ({code})",
            store=store,
            operation=operation,
            details={"error_code": code},
        )
    if isinstance(exc, TimeoutError):
        return StoreUnavailable(
            f"{store.capitalize()} store {operation} timed out",
            store=store,
            operation=operation,
        )
    return StoreUnavailable(
        f"{store.capitalize()} store {operation} failed: {type(exc).__name__}",
        store=store,
        operation=operation,
    )


_TRANSLATED = (BotoCoreError, ClientError, SQLAlchemyError, TimeoutError, OSError)


def translate_errors(store: str, operation: str | None = None) -> Callable[[F], F]:
    """
    Decorator translating driver exceptions raised by a store method.

    Works for both sync and async callables. The method name is used as the
    operation label unless one is given.
    """

    def decorator(func: F) -> F:
        op = operation or func.__name__

        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                try:
                    return await func(*args, **kwargs)
                except _TRANSLATED as e:
                    logger.warning(
                        "Store call failed",
                        extra={"store": store, "operation": op, "error_type": type(e).__name__},
                    )
                    raise translate_store_error(e, store, op) from e

            return async_wrapper  # type: ignore

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return func(*args, **kwargs)
            except _TRANSLATED as e:
                logger.warning(
                    "Store call failed",
                    extra={"store": store, "operation": op, "error_type": type(e).__name__},
                )
                raise translate_store_error(e, store, op) from e

        return wrapper  # type: ignore

    return decorator
