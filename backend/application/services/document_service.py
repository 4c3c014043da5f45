"""
Document service orchestrator.

Read, list, update and delete operations on uploaded documents, gated by the
document access policy. Deletion keeps (blob, record) pairs consistent: the
blob goes first and a failed blob delete leaves the record untouched.

Dependencies: backend.boundary, backend.core
System role: Document management orchestration
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from backend.application.services.access_policy import DocumentAccessPolicy
from backend.application.services.sharing_service import SharingService
from backend.boundary.blob_store import BlobStore
from backend.boundary.db.CRUD.document_crud import document_crud
from backend.boundary.db.models.document_model import TITLE_MAX_LENGTH
from backend.boundary.db.transaction import commit
from backend.core.exceptions import StoreUnavailable, ValidationError
from backend.models.document import Document
from backend.models.identity import Identity

logger = logging.getLogger(__name__)


class DocumentService:
    """
    Document service orchestrator.

    Handles document lifecycle after upload: read, content, list, update,
    deletion.
    """

    def __init__(
        self,
        db: AsyncSession,
        blob_store: BlobStore,
        policy: DocumentAccessPolicy | None = None,
        sharing: SharingService | None = None,
    ) -> None:
        """
        Initialize document service.

        Args:
            db: AsyncSession for document records
            blob_store: Blob store holding the PDFs
            policy: Access policy (concealing by default)
            sharing: Optional SharingService for visibility changes (created if None)
        """
        self.db = db
        self.blob_store = blob_store
        self.policy = policy or DocumentAccessPolicy()
        self._sharing = sharing

    @property
    def sharing(self) -> SharingService:
        """Lazy-load sharing service bound to the same session."""
        if self._sharing is None:
            self._sharing = SharingService(self.db, self.blob_store, self.policy)
        return self._sharing

    async def get(self, caller: Identity | None, document_id: UUID) -> Document:
        """
        Get a document's metadata.

        Raises:
            NotFound: Unknown document, or private and concealed
            Unauthorized: Private and concealment disabled
        """
        document = await self.policy.load_readable(self.db, caller, document_id)
        return Document.model_validate(document)

    async def get_content(
        self,
        caller: Identity | None,
        document_id: UUID,
    ) -> tuple[Document, bytes]:
        """
        Read a document's PDF bytes, authorized exactly like ``get``.

        Returns:
            tuple[Document, bytes]: Metadata and file content

        Raises:
            NotFound: Unknown document, concealed, or blob missing
            Unauthorized: Private and concealment disabled
            StoreUnavailable: Blob read failed
        """
        document = await self.policy.load_readable(self.db, caller, document_id)
        content = self.blob_store.download(document.blob_path)
        return Document.model_validate(document), content

    async def list(
        self,
        caller: Identity | None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[Document]:
        """
        List public documents plus the caller's own, newest first.

        Args:
            caller: Optional identity
            limit: Maximum number of documents
            offset: Number to skip

        Returns:
            list[Document]: Readable documents
        """
        documents = await document_crud.get_visible(
            self.db,
            viewer_id=caller.id if caller else None,
            limit=limit,
            offset=offset,
        )
        return [Document.model_validate(d) for d in documents]

    async def update(
        self,
        caller: Identity | None,
        document_id: UUID,
        title: str | None = None,
        is_public: bool | None = None,
    ) -> Document:
        """
        Update title and/or visibility of an owned document in one transaction.

        Args:
            caller: Must be the owner
            document_id: Target document
            title: New title (blank is rejected)
            is_public: New visibility (idempotent)

        Returns:
            Document: Updated document

        Raises:
            Unauthenticated, NotFound, Forbidden, ValidationError, StoreUnavailable
        """
        document = await self.policy.load_owned(self.db, caller, document_id)

        if title is not None:
            title = title.strip()
            if not title:
                raise ValidationError("Title cannot be empty", field="title")
            if len(title) > TITLE_MAX_LENGTH:
                raise ValidationError(
                    "Title is too long",
                    field="title",
                    details={"max_length": TITLE_MAX_LENGTH},
                )

        renamed = title is not None and title != document.title
        if renamed:
            document = await document_crud.update(self.db, document, title=title)

        if is_public is not None:
            # Commits the pending rename too, or rolls both back
            document = await self.sharing.apply_visibility(document, is_public)

        if renamed:
            await commit(self.db)
            logger.info(
                "Document renamed",
                extra={"document_id": str(document_id)},
            )

        return Document.model_validate(document)

    async def delete(self, caller: Identity | None, document_id: UUID) -> None:
        """
        Delete an owned document, its blob and its comments.

        Steps:
        1. Load and check ownership
        2. Delete the blob (failure aborts; record untouched)
        3. Delete record and comments, commit

        Raises:
            Unauthenticated, NotFound, Forbidden
            StoreUnavailable: Blob delete failed, or record delete failed after
                the blob was removed (``dangling_blob_path`` in details)
        """
        document = await self.policy.load_owned(self.db, caller, document_id)
        blob_path = document.blob_path

        self.blob_store.delete(blob_path)

        try:
            await document_crud.delete_with_comments(self.db, document_id)
            await commit(self.db)
        except StoreUnavailable as e:
            logger.error(
                "Record delete failed after blob removal",
                extra={"document_id": str(document_id), "blob_path": blob_path},
            )
            e.details["dangling_blob_path"] = blob_path
            e.details["document_id"] = str(document_id)
            raise

        logger.info(
            "Document deleted",
            extra={"document_id": str(document_id), "blob_path": blob_path},
        )
