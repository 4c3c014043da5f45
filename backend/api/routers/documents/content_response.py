"""
PDF content response helper.

Dependencies: fastapi
System role: Builds inline PDF responses for the documents router
"""

from urllib.parse import quote

from fastapi.responses import Response

from backend.models.document import Document


def build_content_response(document: Document, content: bytes) -> Response:
    """
    Wrap PDF bytes in an inline response.

    The filename is sent RFC 5987-encoded so non-ASCII names survive.

    Args:
        document: Document metadata
        content: PDF bytes

    Returns:
        Response: application/pdf response
    """
    filename = quote(document.original_name or "document.pdf")
    return Response(
        content=content,
        media_type=document.mime_type,
        headers={
            "Content-Disposition": f"inline; filename*=UTF-8''{filename}",
            "Cache-Control": "private, max-age=0" if not document.is_public else "max-age=3600",
        },
    )
