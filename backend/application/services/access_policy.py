"""
Document access policy.

Loads a document on behalf of a caller and enforces the read and ownership
rules shared by the document, sharing and comment services.

Read rule: public documents are readable by anyone; private documents only by
their owner. A non-owner reading a private document gets NotFound when
concealment is on (the default) so existence is not revealed, Unauthorized
otherwise.

Mutation rule: a caller is required, the row must exist, and the caller must
own it (Forbidden otherwise).

Dependencies: backend.boundary.db.CRUD
System role: Authorization for document reads and writes
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from backend.boundary.db.CRUD.document_crud import document_crud
from backend.boundary.db.models.document_model import DocumentModel
from backend.core.exceptions import Forbidden, NotFound, Unauthenticated, Unauthorized
from backend.models.identity import Identity

logger = logging.getLogger(__name__)


def is_owner(caller: Identity | None, document: DocumentModel) -> bool:
    """True when ``caller`` uploaded ``document``."""
    return caller is not None and caller.id == document.owner_id


class DocumentAccessPolicy:
    """Authorizes document access for one request."""

    def __init__(self, conceal_private_documents: bool = True) -> None:
        """
        Initialize policy.

        Args:
            conceal_private_documents: Answer NotFound instead of Unauthorized
                for private documents the caller does not own
        """
        self.conceal_private_documents = conceal_private_documents

    def can_read(self, caller: Identity | None, document: DocumentModel) -> bool:
        """Whether ``caller`` may read ``document`` metadata and content."""
        return document.is_public or is_owner(caller, document)

    async def load_readable(
        self,
        db: AsyncSession,
        caller: Identity | None,
        document_id: UUID,
    ) -> DocumentModel:
        """
        Load a document the caller may read.

        Raises:
            NotFound: No such document, or private and concealed
            Unauthorized: Private, not owned, concealment disabled
        """
        document = await document_crud.get_by_id(db, document_id)
        if document is None:
            raise NotFound("Document", str(document_id))

        if not self.can_read(caller, document):
            logger.info(
                "Read of private document denied",
                extra={
                    "document_id": str(document_id),
                    "caller_id": str(caller.id) if caller else None,
                },
            )
            if self.conceal_private_documents:
                raise NotFound("Document", str(document_id))
            raise Unauthorized(
                "This document is private",
                details={"document_id": str(document_id)},
            )
        return document

    async def load_owned(
        self,
        db: AsyncSession,
        caller: Identity | None,
        document_id: UUID,
    ) -> DocumentModel:
        """
        Load a document the caller owns.

        Order: identity present → row exists → ownership.

        Raises:
            Unauthenticated: No caller
            NotFound: No such document
            Forbidden: Caller is not the owner
        """
        if caller is None:
            raise Unauthenticated()

        document = await document_crud.get_by_id(db, document_id)
        if document is None:
            raise NotFound("Document", str(document_id))

        if not is_owner(caller, document):
            logger.warning(
                "Mutation by non-owner rejected",
                extra={"document_id": str(document_id), "caller_id": str(caller.id)},
            )
            raise Forbidden(details={"document_id": str(document_id)})
        return document
