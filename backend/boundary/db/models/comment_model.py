"""
Comment ORM model.

A remark attached to one page of a document. Rows are append-only.

Dependencies: sqlalchemy, backend.boundary.db.base
System role: Page-scoped comment persistence
"""

import uuid

from sqlalchemy import ForeignKey, Index, Integer, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backend.boundary.db.base import Base, CreatedAtMixin, UUIDMixin


class CommentModel(Base, UUIDMixin, CreatedAtMixin):
    """
    Comment ORM model.

    Attributes:
        id: UUID primary key
        document_id: Owning document (ON DELETE CASCADE)
        author_id: Commenting user
        page_number: 1-based page the comment refers to
        content: Trimmed, non-empty text
        created_at: Creation timestamp, the thread ordering key
    """

    __tablename__ = "comments"
    __table_args__ = (
        Index("ix_comments_document_page_created", "document_id", "page_number", "created_at"),
    )

    document_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("documents.id", ondelete="CASCADE"),
        nullable=False,
    )
    author_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    page_number: Mapped[int] = mapped_column(Integer, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)

    document = relationship("DocumentModel", back_populates="comments")
