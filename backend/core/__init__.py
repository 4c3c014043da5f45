"""
Core business logic module.

Contains the exception taxonomy and the domain primitives the services build
on: blob path generation, credential handling and bounded retry.
"""

from backend.core.exceptions import (
    Conflict,
    EmptyContent,
    FileTooLarge,
    Forbidden,
    InvalidFileType,
    NotFound,
    PdfShareError,
    StoreUnavailable,
    Unauthenticated,
    Unauthorized,
    ValidationError,
)

__all__ = [
    "PdfShareError",
    "Unauthenticated",
    "Unauthorized",
    "Forbidden",
    "NotFound",
    "ValidationError",
    "InvalidFileType",
    "FileTooLarge",
    "EmptyContent",
    "Conflict",
    "StoreUnavailable",
]
