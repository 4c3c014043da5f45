"""
Document API endpoints.

Routes:
- GET /documents - List public documents plus the caller's own
- POST /documents - Upload a PDF (multipart)
- GET /documents/{id} - Get document metadata
- GET /documents/{id}/content - Stream the PDF bytes
- GET /documents/{id}/share - Get a public or signed read URL
- PATCH /documents/{id} - Update title and/or visibility (owner only)
- DELETE /documents/{id} - Delete document, blob and comments (owner only)

Dependencies: backend.application.services, backend.models
System role: Document HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from fastapi.responses import Response

from backend.api.deps import (
    get_document_service,
    get_optional_identity,
    get_settings_dependency,
    get_sharing_service,
    get_upload_service,
    require_identity,
)
from backend.api.error_handling import handle_service_errors
from backend.application.services.document_service import DocumentService
from backend.application.services.sharing_service import SharingService
from backend.application.services.upload_service import UploadService
from backend.configs import Settings
from backend.core.exceptions import FileTooLarge
from backend.models.auth import MessageResponse
from backend.models.document import (
    Document,
    DocumentListResponse,
    DocumentUpdateRequest,
    ShareReference,
)
from backend.models.identity import Identity

from .content_response import build_content_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["documents"])


@router.get("", response_model=DocumentListResponse)
@handle_service_errors
async def list_documents(
    limit: int | None = Query(default=None, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    identity: Identity | None = Depends(get_optional_identity),
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentListResponse:
    """
    List documents visible to the caller, newest first.

    Anonymous callers see public documents only.
    """
    documents = await document_service.list(identity, limit=limit, offset=offset)
    return DocumentListResponse(documents=documents, total=len(documents))


@router.post("", response_model=Document)
@handle_service_errors
async def upload_document(
    file: UploadFile = File(...),
    title: str | None = Form(default=None),
    is_public: bool = Form(default=False),
    identity: Identity = Depends(require_identity),
    upload_service: UploadService = Depends(get_upload_service),
    settings: Settings = Depends(get_settings_dependency),
) -> Document:
    """
    Upload a PDF.

    At most ``max_size_bytes + 1`` bytes of the body are read into memory.

    Args:
        file: PDF file (application/pdf, at most 10 MiB)
        title: Optional display title (defaults to the filename)
        is_public: Initial visibility
        identity: Authenticated caller
        upload_service: Injected UploadService
        settings: Application settings (upload limits)

    Returns:
        Document: Created document

    Raises:
        HTTPException(400): Wrong type, too large or empty
        HTTPException(401): Not signed in
        HTTPException(500): Store failure
    """
    logger.info(
        "Document upload received",
        extra={
            "owner_id": str(identity.id),
            "file_name": file.filename,
            "content_type": file.content_type,
        },
    )
    max_size = settings.uploads.max_size_bytes
    if file.size is not None and file.size > max_size:
        raise FileTooLarge(file.size, max_size)

    # One byte past the limit is enough for the service to reject oversize bodies
    data = await file.read(max_size + 1)
    return await upload_service.upload(
        identity,
        file_bytes=data,
        declared_mime_type=file.content_type,
        filename=file.filename or "",
        size_bytes=len(data),
        title=title,
        is_public=is_public,
    )


@router.get("/{document_id}", response_model=Document)
@handle_service_errors
async def get_document(
    document_id: UUID,
    identity: Identity | None = Depends(get_optional_identity),
    document_service: DocumentService = Depends(get_document_service),
) -> Document:
    """Get a document's metadata (public, or private and owned)."""
    return await document_service.get(identity, document_id)


@router.get("/{document_id}/content")
@handle_service_errors
async def get_document_content(
    document_id: UUID,
    identity: Identity | None = Depends(get_optional_identity),
    document_service: DocumentService = Depends(get_document_service),
) -> Response:
    """Return the PDF bytes, authorized like GET /documents/{id}."""
    document, content = await document_service.get_content(identity, document_id)
    return build_content_response(document, content)


@router.get("/{document_id}/share", response_model=ShareReference)
@handle_service_errors
async def get_share_reference(
    document_id: UUID,
    identity: Identity | None = Depends(get_optional_identity),
    sharing_service: SharingService = Depends(get_sharing_service),
) -> ShareReference:
    """
    Get a URL through which the PDF can be read.

    Public documents return their durable public URL; private documents
    return a signed URL, to their owner only.
    """
    return await sharing_service.get_share_reference(identity, document_id)


@router.patch("/{document_id}", response_model=Document)
@handle_service_errors
async def update_document(
    document_id: UUID,
    request: DocumentUpdateRequest,
    identity: Identity = Depends(require_identity),
    document_service: DocumentService = Depends(get_document_service),
) -> Document:
    """
    Update title and/or visibility.

    Raises:
        HTTPException(400): Blank title
        HTTPException(403): Caller is not the owner
        HTTPException(404): Document not found
    """
    return await document_service.update(
        identity,
        document_id,
        title=request.title,
        is_public=request.is_public,
    )


@router.delete("/{document_id}", response_model=MessageResponse)
@handle_service_errors
async def delete_document(
    document_id: UUID,
    identity: Identity = Depends(require_identity),
    document_service: DocumentService = Depends(get_document_service),
) -> MessageResponse:
    """
    Delete a document with its blob and comments.

    Raises:
        HTTPException(403): Caller is not the owner
        HTTPException(404): Document not found
        HTTPException(500): Blob or record store failure
    """
    await document_service.delete(identity, document_id)
    return MessageResponse(message="Document deleted successfully")
