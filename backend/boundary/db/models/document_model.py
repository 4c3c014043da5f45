"""
Document ORM model.

Represents one uploaded PDF: its blob locator, file metadata, owner and
visibility flag.

Dependencies: sqlalchemy, backend.boundary.db.base
System role: Document persistence
"""

import uuid

from sqlalchemy import BigInteger, Boolean, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backend.boundary.db.base import Base, TimestampMixin, UUIDMixin

TITLE_MAX_LENGTH = 255
ORIGINAL_NAME_MAX_LENGTH = 255


class DocumentModel(Base, UUIDMixin, TimestampMixin):
    """
    Document ORM model.

    Lifecycle: created together with its blob by the upload service; title and
    is_public are the only mutable columns; deleted together with its blob.
    Comments cascade on delete.

    Attributes:
        id: UUID primary key (auto-generated)
        title: Display name
        blob_path: Object key in the blob store (unique, immutable)
        original_name: Filename as uploaded
        size: File size in bytes
        mime_type: Declared MIME type
        owner_id: Uploading user (immutable)
        is_public: Whether anyone may read the document
        created_at: Upload timestamp (UTC)
        updated_at: Last modification timestamp (UTC)
    """

    __tablename__ = "documents"

    title: Mapped[str] = mapped_column(String(TITLE_MAX_LENGTH), nullable=False)

    blob_path: Mapped[str] = mapped_column(
        String(1024),
        nullable=False,
        unique=True,
        doc="Blob store key; one row per blob",
    )

    original_name: Mapped[str] = mapped_column(String(ORIGINAL_NAME_MAX_LENGTH), nullable=False)
    size: Mapped[int] = mapped_column(BigInteger, nullable=False)
    mime_type: Mapped[str] = mapped_column(String(127), nullable=False)

    owner_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    is_public: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    comments = relationship(
        "CommentModel",
        back_populates="document",
        cascade="all, delete-orphan",
    )
