"""
Document domain models and schemas.

Request/response schemas for document operations.

Dependencies: pydantic
System role: Document API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class Document(BaseModel):
    """Persisted document as returned to callers."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    title: str
    blob_path: str
    original_name: str
    size: int
    mime_type: str
    owner_id: uuid.UUID
    is_public: bool
    created_at: datetime
    updated_at: datetime


class DocumentListResponse(BaseModel):
    """Document list response."""

    documents: list[Document]
    total: int


class DocumentUpdateRequest(BaseModel):
    """Request schema for PATCH /documents/{id}."""

    title: str | None = Field(default=None, description="New display title")
    is_public: bool | None = Field(default=None, description="New visibility flag")


class ShareReference(BaseModel):
    """A URL through which a document's PDF can be read."""

    document_id: uuid.UUID
    url: str = Field(description="Public URL, or a signed URL for private documents")
    is_public: bool
    expires_at: datetime | None = Field(
        default=None,
        description="Expiry of a signed URL; None for durable public URLs",
    )
