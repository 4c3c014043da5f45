"""
Comment domain models and schemas.

Dependencies: pydantic
System role: Comment API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CommentCreateRequest(BaseModel):
    """Request schema for adding a comment to a page."""

    model_config = ConfigDict(populate_by_name=True)

    page_number: int = Field(alias="pageNumber", description="1-based page number")
    content: str = Field(description="Comment text")


class Comment(BaseModel):
    """Comment enriched with its author's display data."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    document_id: uuid.UUID
    author_id: uuid.UUID
    page_number: int
    content: str
    created_at: datetime
    author_name: str = "Anonymous"
    author_email: str = "Anonymous"


class CommentListResponse(BaseModel):
    """One page's comment thread."""

    document_id: uuid.UUID
    page_number: int
    comments: list[Comment]
    total: int
