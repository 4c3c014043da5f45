"""
Comment CRUD operations.

Page-scoped, time-ordered comment queries for CommentModel.

Dependencies: sqlalchemy, backend.boundary.db.models
System role: Comment persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from backend.boundary.db.CRUD.base_crud import BaseCRUD
from backend.boundary.db.models.comment_model import CommentModel
from backend.boundary.errors import translate_errors


class CommentCRUD(BaseCRUD[CommentModel]):
    """CRUD operations for CommentModel."""

    def __init__(self) -> None:
        """Initialize CommentCRUD with CommentModel."""
        super().__init__(CommentModel)

    @translate_errors("record", "select")
    async def get_for_page(
        self,
        session: AsyncSession,
        document_id: UUID,
        page_number: int,
    ) -> Sequence[CommentModel]:
        """
        Retrieve one page's comment thread, oldest first.

        Args:
            session: Async database session
            document_id: Owning document UUID
            page_number: 1-based page

        Returns:
            Sequence of CommentModels ordered by created_at, then id
        """
        stmt = (
            select(CommentModel)
            .where(
                CommentModel.document_id == document_id,
                CommentModel.page_number == page_number,
            )
            .order_by(CommentModel.created_at.asc(), CommentModel.id.asc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()


comment_crud = CommentCRUD()
