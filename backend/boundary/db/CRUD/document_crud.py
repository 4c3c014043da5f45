"""
Document CRUD operations.

Provides Create, Read, Update, Delete operations for DocumentModel
with visibility-aware listing and cascading delete of page comments.

Dependencies: sqlalchemy, backend.boundary.db.models
System role: Document persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from backend.boundary.db.CRUD.base_crud import BaseCRUD
from backend.boundary.db.models.comment_model import CommentModel
from backend.boundary.db.models.document_model import DocumentModel
from backend.boundary.errors import translate_errors


class DocumentCRUD(BaseCRUD[DocumentModel]):
    """
    CRUD operations for DocumentModel.

    Extends BaseCRUD with listing filtered by visibility and owner.
    """

    def __init__(self) -> None:
        """Initialize DocumentCRUD with DocumentModel."""
        super().__init__(DocumentModel)

    @translate_errors("record", "select")
    async def get_visible(
        self,
        session: AsyncSession,
        viewer_id: UUID | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[DocumentModel]:
        """
        Retrieve public documents plus those owned by the viewer, newest first.

        Args:
            session: Async database session
            viewer_id: Caller identity; None lists public documents only
            limit: Maximum number of documents to return
            offset: Number of documents to skip

        Returns:
            Sequence of DocumentModels
        """
        visibility = DocumentModel.is_public.is_(True)
        if viewer_id is not None:
            visibility = or_(visibility, DocumentModel.owner_id == viewer_id)

        stmt = (
            select(DocumentModel)
            .where(visibility)
            .order_by(DocumentModel.created_at.desc())
            .offset(offset)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    @translate_errors("record", "delete")
    async def delete_with_comments(self, session: AsyncSession, id: UUID) -> bool:
        """
        Delete a document row and its comments in the current transaction.

        Args:
            session: Async database session
            id: Document UUID

        Returns:
            True if the document row was deleted, False if not found
        """
        await session.execute(delete(CommentModel).where(CommentModel.document_id == id))
        result = await session.execute(delete(DocumentModel).where(DocumentModel.id == id))
        return result.rowcount > 0


document_crud = DocumentCRUD()
