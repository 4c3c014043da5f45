"""
Comment service.

Page-scoped comment threads on documents. Comments are visible and postable
only where the document itself is readable.

Dependencies: backend.boundary.db.CRUD, backend.application.services.access_policy
System role: Comment orchestration and author enrichment
"""

import logging
from typing import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from backend.application.services.access_policy import DocumentAccessPolicy
from backend.boundary.db.CRUD.comment_crud import comment_crud
from backend.boundary.db.CRUD.user_crud import user_crud
from backend.boundary.db.models.comment_model import CommentModel
from backend.boundary.db.models.user_model import UserModel
from backend.boundary.db.transaction import commit
from backend.core.exceptions import EmptyContent, Unauthenticated, ValidationError
from backend.models.comment import Comment
from backend.models.identity import Identity

logger = logging.getLogger(__name__)

ANONYMOUS = "Anonymous"


def display_name(user: UserModel | None) -> str:
    """Profile name, else email local-part, else ``Anonymous``."""
    if user is None:
        return ANONYMOUS
    if user.name and user.name.strip():
        return user.name.strip()
    if user.email:
        local_part = user.email.split("@", 1)[0]
        if local_part:
            return local_part
    return ANONYMOUS


def _validate_page(page_number: int) -> None:
    if page_number < 1:
        raise ValidationError(
            "Page number must be at least 1",
            field="page_number",
            details={"page_number": page_number},
        )


class CommentService:
    """Lists and adds page comments."""

    def __init__(
        self,
        db: AsyncSession,
        policy: DocumentAccessPolicy | None = None,
    ) -> None:
        """
        Initialize comment service.

        Args:
            db: AsyncSession for comment records
            policy: Access policy gating the parent document
        """
        self.db = db
        self.policy = policy or DocumentAccessPolicy()

    async def _enrich(self, comments: Sequence[CommentModel]) -> list[Comment]:
        """Attach author display data using a single user lookup."""
        authors = await user_crud.get_many(self.db, (c.author_id for c in comments))
        by_id = {user.id: user for user in authors}

        enriched = []
        for comment in comments:
            author = by_id.get(comment.author_id)
            enriched.append(
                Comment(
                    id=comment.id,
                    document_id=comment.document_id,
                    author_id=comment.author_id,
                    page_number=comment.page_number,
                    content=comment.content,
                    created_at=comment.created_at,
                    author_name=display_name(author),
                    author_email=author.email if author and author.email else ANONYMOUS,
                )
            )
        return enriched

    async def list(
        self,
        caller: Identity | None,
        document_id: UUID,
        page_number: int,
    ) -> list[Comment]:
        """
        List one page's comments, oldest first.

        Args:
            caller: Optional identity
            document_id: Parent document
            page_number: 1-based page

        Returns:
            list[Comment]: Comments with author display data

        Raises:
            NotFound / Unauthorized: Parent document not readable
            ValidationError: page_number < 1
        """
        _validate_page(page_number)
        await self.policy.load_readable(self.db, caller, document_id)
        comments = await comment_crud.get_for_page(self.db, document_id, page_number)
        return await self._enrich(comments)

    async def add(
        self,
        caller: Identity | None,
        document_id: UUID,
        page_number: int,
        content: str,
    ) -> Comment:
        """
        Add a comment to a page.

        Raises:
            Unauthenticated: No caller
            EmptyContent: Content is blank after trimming
            ValidationError: page_number < 1
            NotFound / Unauthorized: Parent document not readable
            StoreUnavailable: Record store failure
        """
        if caller is None:
            raise Unauthenticated()
        content = (content or "").strip()
        if not content:
            raise EmptyContent()
        _validate_page(page_number)

        await self.policy.load_readable(self.db, caller, document_id)

        comment = await comment_crud.create(
            self.db,
            document_id=document_id,
            author_id=caller.id,
            page_number=page_number,
            content=content,
        )
        await commit(self.db)

        logger.info(
            "Comment added",
            extra={
                "document_id": str(document_id),
                "page_number": page_number,
                "author_id": str(caller.id),
            },
        )
        enriched = await self._enrich([comment])
        return enriched[0]

