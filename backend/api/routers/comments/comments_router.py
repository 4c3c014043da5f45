"""
Comment API endpoints.

Routes:
- GET /documents/{id}/comments?page=N - List a page's comments, oldest first
- POST /documents/{id}/comments - Add a comment to a page

Dependencies: backend.application.services, backend.models
System role: Page comment HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from backend.api.deps import get_comment_service, get_optional_identity, require_identity
from backend.api.error_handling import handle_service_errors
from backend.application.services.comment_service import CommentService
from backend.models.comment import Comment, CommentCreateRequest, CommentListResponse
from backend.models.identity import Identity

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["comments"])


@router.get("/{document_id}/comments", response_model=CommentListResponse)
@handle_service_errors
async def list_comments(
    document_id: UUID,
    page: int = Query(..., description="1-based page number"),
    identity: Identity | None = Depends(get_optional_identity),
    comment_service: CommentService = Depends(get_comment_service),
) -> CommentListResponse:
    """
    List one page's comments.

    Raises:
        HTTPException(400): page < 1
        HTTPException(404): Document not found or not readable
    """
    comments = await comment_service.list(identity, document_id, page)
    return CommentListResponse(
        document_id=document_id,
        page_number=page,
        comments=comments,
        total=len(comments),
    )


@router.post("/{document_id}/comments", response_model=Comment)
@handle_service_errors
async def add_comment(
    document_id: UUID,
    request: CommentCreateRequest,
    identity: Identity = Depends(require_identity),
    comment_service: CommentService = Depends(get_comment_service),
) -> Comment:
    """
    Add a comment to a page.

    Raises:
        HTTPException(400): Empty content or page < 1
        HTTPException(401): Not signed in
        HTTPException(404): Document not found or not readable
    """
    logger.info(
        "Comment submitted",
        extra={"document_id": str(document_id), "page_number": request.page_number},
    )
    return await comment_service.add(
        identity,
        document_id,
        request.page_number,
        request.content,
    )
