"""
Sharing service.

Owns the document visibility state machine (Private <-> Public) and hands out
URLs through which a document's PDF can be read.

Dependencies: backend.boundary, backend.application.services.access_policy
System role: Visibility and share-link orchestration
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from backend.application.services.access_policy import DocumentAccessPolicy
from backend.boundary.blob_store import BlobStore
from backend.boundary.db.CRUD.document_crud import document_crud
from backend.boundary.db.models.document_model import DocumentModel
from backend.boundary.db.transaction import commit, rollback
from backend.core.exceptions import PdfShareError
from backend.models.document import Document, ShareReference
from backend.models.identity import Identity

logger = logging.getLogger(__name__)


class SharingService:
    """Visibility changes and share references."""

    def __init__(
        self,
        db: AsyncSession,
        blob_store: BlobStore,
        policy: DocumentAccessPolicy | None = None,
        signed_url_ttl: int = 3600,
    ) -> None:
        """
        Initialize sharing service.

        Args:
            db: AsyncSession for document records
            blob_store: Blob store issuing public and signed URLs
            policy: Access policy (concealing by default)
            signed_url_ttl: Lifetime of signed URLs in seconds
        """
        self.db = db
        self.blob_store = blob_store
        self.policy = policy or DocumentAccessPolicy()
        self.signed_url_ttl = signed_url_ttl

    async def apply_visibility(self, document: DocumentModel, is_public: bool) -> DocumentModel:
        """
        Flip visibility on an owned, loaded document.

        The record flag and the blob's public readability change together and
        are committed along with any other pending change in the session. On
        failure the session is rolled back and a blob already switched is
        switched back. No write happens when the value is unchanged.

        Raises:
            StoreUnavailable: Record or blob store failure
        """
        if document.is_public == is_public:
            logger.debug(
                "Visibility unchanged",
                extra={"document_id": str(document.id), "is_public": is_public},
            )
            return document

        document_id = str(document.id)
        blob_path = document.blob_path
        try:
            document = await document_crud.update(self.db, document, is_public=is_public)
            self.blob_store.set_visibility(blob_path, is_public)
        except PdfShareError as e:
            await self._rollback(e)
            raise

        try:
            await commit(self.db)
        except PdfShareError as e:
            logger.error(
                "Visibility commit failed, restoring blob visibility",
                extra={"document_id": document_id, "blob_path": blob_path},
            )
            await self._rollback(e)
            self._restore_blob_visibility(blob_path, not is_public, e)
            raise

        logger.info(
            "Document visibility changed",
            extra={"document_id": document_id, "is_public": is_public},
        )
        return document

    async def _rollback(self, error: PdfShareError) -> None:
        try:
            await rollback(self.db)
        except PdfShareError as rollback_error:
            logger.warning(
                "Rollback after failed visibility change also failed",
                extra={"error": str(rollback_error), "original_error": str(error)},
            )

    def _restore_blob_visibility(
        self,
        blob_path: str,
        is_public: bool,
        error: PdfShareError,
    ) -> None:
        """Undo a blob visibility switch; failures are recorded on ``error``."""
        try:
            self.blob_store.set_visibility(blob_path, is_public)
        except PdfShareError as restore_error:
            logger.error(
                "Failed to restore blob visibility",
                extra={"blob_path": blob_path, "error": str(restore_error)},
            )
            error.details["inconsistent_blob_path"] = blob_path
            error.details["cleanup_error"] = restore_error.message

    async def set_public(
        self,
        caller: Identity | None,
        document_id: UUID,
        is_public: bool,
    ) -> Document:
        """
        Set a document's visibility.

        Args:
            caller: Must be the document owner
            document_id: Target document
            is_public: Desired visibility

        Returns:
            Document: Document with the requested visibility

        Raises:
            Unauthenticated: No caller
            NotFound: Unknown document
            Forbidden: Caller is not the owner
            StoreUnavailable: Record store failure
        """
        document = await self.policy.load_owned(self.db, caller, document_id)
        document = await self.apply_visibility(document, is_public)
        return Document.model_validate(document)

    async def get_share_reference(
        self,
        caller: Identity | None,
        document_id: UUID,
    ) -> ShareReference:
        """
        Produce a URL through which the PDF can be read.

        Public documents get their durable public URL. Private documents get a
        signed, time-limited URL, and only their owner may ask for one.

        Raises:
            NotFound / Unauthorized: Document missing or not readable by caller
            StoreUnavailable: Signing failed
        """
        document = await self.policy.load_readable(self.db, caller, document_id)

        if document.is_public:
            return ShareReference(
                document_id=document.id,
                url=self.blob_store.public_url(document.blob_path),
                is_public=True,
            )

        url, expires_at = self.blob_store.signed_url(document.blob_path, self.signed_url_ttl)
        logger.info(
            "Signed URL issued",
            extra={"document_id": str(document.id), "expires_at": expires_at.isoformat()},
        )
        return ShareReference(
            document_id=document.id,
            url=url,
            is_public=False,
            expires_at=expires_at,
        )
