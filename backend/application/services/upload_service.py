"""
Upload service.

Validates an incoming PDF and persists it as a (blob, record) pair.

Ordering: the blob is written first, then the document row is inserted and
committed. If the record step fails the orphaned blob is deleted as a
best-effort compensating action; a failure of that delete is logged and
attached to the original error rather than replacing it.

Dependencies: backend.boundary, backend.core
System role: Document creation workflow
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from backend.boundary.blob_store import BlobStore
from backend.boundary.db.CRUD.document_crud import document_crud
from backend.boundary.db.models.document_model import (
    ORIGINAL_NAME_MAX_LENGTH,
    TITLE_MAX_LENGTH,
)
from backend.boundary.db.transaction import commit, rollback
from backend.configs.uploads import UploadSettings
from backend.core.blob_paths import generate_blob_path, truncate_filename
from backend.core.exceptions import (
    FileTooLarge,
    InvalidFileType,
    PdfShareError,
    Unauthenticated,
    ValidationError,
)
from backend.models.document import Document
from backend.models.identity import Identity

logger = logging.getLogger(__name__)


class UploadService:
    """Creates documents from uploaded files."""

    def __init__(
        self,
        db: AsyncSession,
        blob_store: BlobStore,
        settings: UploadSettings | None = None,
    ) -> None:
        """
        Initialize upload service.

        Args:
            db: AsyncSession for document records
            blob_store: Blob store receiving the file bytes
            settings: Upload limits (defaults: 10 MiB, application/pdf)
        """
        self.db = db
        self.blob_store = blob_store
        self.settings = settings or UploadSettings()

    def validate(
        self,
        caller: Identity | None,
        declared_mime_type: str | None,
        size_bytes: int,
    ) -> Identity:
        """
        Reject uploads before any side effect happens.

        Raises:
            Unauthenticated: No caller
            InvalidFileType: MIME type is not the allowed PDF type
            FileTooLarge: size exceeds the configured limit
            ValidationError: empty file
        """
        if caller is None:
            raise Unauthenticated()
        if declared_mime_type != self.settings.allowed_mime_type:
            raise InvalidFileType(declared_mime_type, self.settings.allowed_mime_type)
        if size_bytes > self.settings.max_size_bytes:
            raise FileTooLarge(size_bytes, self.settings.max_size_bytes)
        if size_bytes <= 0:
            raise ValidationError("No file provided", field="file")
        return caller

    async def upload(
        self,
        caller: Identity | None,
        file_bytes: bytes,
        declared_mime_type: str | None,
        filename: str,
        size_bytes: int,
        title: str | None = None,
        is_public: bool = False,
    ) -> Document:
        """
        Validate and store a PDF.

        Steps:
        1. Validate caller, type, size and title (no side effects on rejection)
        2. Upload bytes to the blob store under an owner-scoped path, readable
           by anyone only when ``is_public``
        3. Insert the document row and commit
        4. On record failure: roll back, delete the blob, re-raise

        Args:
            caller: Authenticated identity (None is rejected)
            file_bytes: File content
            declared_mime_type: Client-declared MIME type
            filename: Original filename
            size_bytes: Declared size in bytes
            title: Optional display title (defaults to filename, at most 255 chars)
            is_public: Initial visibility

        Returns:
            Document: Persisted document with generated id and timestamps

        Raises:
            Unauthenticated, InvalidFileType, FileTooLarge, ValidationError,
            StoreUnavailable, Conflict
        """
        owner = self.validate(caller, declared_mime_type, size_bytes)
        if len(file_bytes) != size_bytes:
            raise ValidationError(
                "Declared size does not match received bytes",
                field="file",
                details={"declared": size_bytes, "received": len(file_bytes)},
            )

        original_name = truncate_filename(filename or "document.pdf", ORIGINAL_NAME_MAX_LENGTH)
        resolved_title = (title or "").strip()
        if len(resolved_title) > TITLE_MAX_LENGTH:
            raise ValidationError(
                "Title is too long",
                field="title",
                details={"max_length": TITLE_MAX_LENGTH},
            )
        resolved_title = resolved_title or original_name
        blob_path = generate_blob_path(owner.id, original_name)

        self.blob_store.upload(blob_path, file_bytes, declared_mime_type, is_public=is_public)

        try:
            document = await document_crud.create(
                self.db,
                title=resolved_title,
                blob_path=blob_path,
                original_name=original_name,
                size=size_bytes,
                mime_type=declared_mime_type,
                owner_id=owner.id,
                is_public=is_public,
            )
            await commit(self.db)
        except PdfShareError as e:
            logger.error(
                "Document record insert failed, removing uploaded blob",
                extra={"blob_path": blob_path, "owner_id": str(owner.id), "error": str(e)},
            )
            await self._discard_orphan(blob_path, e)
            raise

        logger.info(
            "Document uploaded",
            extra={
                "document_id": str(document.id),
                "owner_id": str(owner.id),
                "size_bytes": size_bytes,
            },
        )
        return Document.model_validate(document)

    async def _discard_orphan(self, blob_path: str, error: PdfShareError) -> None:
        """Compensate a failed insert; failures are recorded on ``error``."""
        try:
            await rollback(self.db)
        except PdfShareError as rollback_error:
            logger.warning(
                "Rollback after failed insert also failed",
                extra={"error": str(rollback_error)},
            )

        try:
            self.blob_store.delete(blob_path)
        except PdfShareError as cleanup_error:
            logger.error(
                "Failed to delete orphaned blob",
                extra={"blob_path": blob_path, "error": str(cleanup_error)},
            )
            error.details["orphaned_blob_path"] = blob_path
            error.details["cleanup_error"] = cleanup_error.message
