"""
Exception hierarchy for the PDF sharing service.

Closed taxonomy of domain errors. Every error carries a stable machine-readable
``kind`` plus a human-readable message; store-specific failures are translated
into this taxonomy once, at the boundary layer, so services and routers never
inspect driver exceptions.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class PdfShareError(Exception):
    """Base exception for all application errors."""

    kind: str = "error"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Serializable form used in HTTP error bodies."""
        return {"kind": self.kind, "message": self.message, "details": self.details}


class Unauthenticated(PdfShareError):
    """Raised when no valid caller identity is present."""

    kind = "unauthenticated"

    def __init__(
        self,
        message: str = "Authentication required",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)


class Unauthorized(PdfShareError):
    """Raised when an identity may not read a resource."""

    kind = "unauthorized"

    def __init__(
        self,
        message: str = "Not allowed to access this resource",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)


class Forbidden(PdfShareError):
    """Raised when an identity is not the owner of a resource it tries to mutate."""

    kind = "forbidden"

    def __init__(
        self,
        message: str = "Only the owner may modify this resource",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)


class NotFound(PdfShareError):
    """Raised when a record does not exist."""

    kind = "not_found"

    def __init__(
        self,
        resource: str,
        resource_id: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize not found error.

        Args:
            resource: Resource type name (e.g. "Document")
            resource_id: Identifier that failed to resolve
            details: Additional context
        """
        details = details or {}
        details["resource_id"] = resource_id
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"{resource} not found: {resource_id}", details)


class ValidationError(PdfShareError):
    """Raised when input validation fails."""

    kind = "validation_error"

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class InvalidFileType(ValidationError):
    """Raised when an upload is not a PDF."""

    kind = "invalid_file_type"

    def __init__(self, mime_type: str | None, allowed: str) -> None:
        super().__init__(
            "Invalid file type. Only PDF files are allowed.",
            field="file",
            details={"mime_type": mime_type, "allowed": allowed},
        )


class FileTooLarge(ValidationError):
    """Raised when an upload exceeds the size limit."""

    kind = "file_too_large"

    def __init__(self, size_bytes: int, limit_bytes: int) -> None:
        super().__init__(
            f"File size exceeds {limit_bytes // (1024 * 1024)}MB limit.",
            field="file",
            details={"size_bytes": size_bytes, "limit_bytes": limit_bytes},
        )


class EmptyContent(ValidationError):
    """Raised when a comment body is blank."""

    kind = "empty_content"

    def __init__(self) -> None:
        super().__init__("Comment content must not be empty", field="content")


class Conflict(PdfShareError):
    """Raised when a unique key already exists."""

    kind = "conflict"


class StoreUnavailable(PdfShareError):
    """Raised when a backing store call fails or times out."""

    kind = "store_unavailable"

    def __init__(
        self,
        message: str,
        store: str | None = None,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize store error.

        Args:
            message: Error message
            store: Which store failed ("blob" or "record")
            operation: Operation that failed (upload, delete, insert, ...)
            details: Additional context
        """
        details = details or {}
        if store:
            details["store"] = store
        if operation:
            details["operation"] = operation
        super().__init__(message, details)
