import io
import uuid
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest
from fastapi import UploadFile
from fastapi.testclient import TestClient
from starlette.datastructures import Headers

from backend.api.deps.dependencies import (
    get_comment_service,
    get_document_service,
    get_optional_identity,
    get_settings_dependency,
    get_sharing_service,
    get_upload_service,
)
from backend.api.main import create_app
from backend.api.routers.documents.documents_router import upload_document
from backend.configs import Settings, get_settings
from backend.configs.uploads import UploadSettings
from backend.core.exceptions import (
    FileTooLarge,
    Forbidden,
    InvalidFileType,
    NotFound,
    StoreUnavailable,
)
from backend.models.comment import Comment
from backend.models.document import Document, ShareReference
from backend.models.identity import Identity

CALLER = Identity(id=uuid.uuid4(), email="caller@example.com", name="Caller")


def _document(**overrides) -> Document:
    now = datetime.now(timezone.utc)
    fields = dict(
        id=uuid.uuid4(),
        title="Report",
        blob_path=f"{CALLER.id}/1700000000000-abcd1234-report.pdf",
        original_name="report.pdf",
        size=12,
        mime_type="application/pdf",
        owner_id=CALLER.id,
        is_public=False,
        created_at=now,
        updated_at=now,
    )
    fields.update(overrides)
    return Document(**fields)


@pytest.fixture
def app():
    app = create_app()
    app.dependency_overrides[get_settings_dependency] = lambda: get_settings()
    return app


@pytest.fixture
def client(app):
    app.dependency_overrides[get_optional_identity] = lambda: CALLER
    return TestClient(app)


@pytest.fixture
def anonymous_client(app):
    app.dependency_overrides[get_optional_identity] = lambda: None
    return TestClient(app)


@pytest.fixture
def mock_document_service(app):
    service = AsyncMock()
    app.dependency_overrides[get_document_service] = lambda: service
    return service


@pytest.fixture
def mock_upload_service(app):
    service = AsyncMock()
    app.dependency_overrides[get_upload_service] = lambda: service
    return service


@pytest.fixture
def mock_sharing_service(app):
    service = AsyncMock()
    app.dependency_overrides[get_sharing_service] = lambda: service
    return service


@pytest.fixture
def mock_comment_service(app):
    service = AsyncMock()
    app.dependency_overrides[get_comment_service] = lambda: service
    return service


def test_upload_document(client, mock_upload_service):
    document = _document()
    mock_upload_service.upload.return_value = document

    response = client.post(
        "/api/v1/documents",
        files={"file": ("report.pdf", b"%PDF-1.4 test", "application/pdf")},
        data={"title": "Report", "is_public": "true"},
    )

    assert response.status_code == 200
    assert response.json()["id"] == str(document.id)
    kwargs = mock_upload_service.upload.call_args.kwargs
    assert kwargs["declared_mime_type"] == "application/pdf"
    assert kwargs["file_bytes"] == b"%PDF-1.4 test"
    assert kwargs["size_bytes"] == len(b"%PDF-1.4 test")
    assert kwargs["title"] == "Report"
    assert kwargs["is_public"] is True


def test_upload_requires_identity(anonymous_client, mock_upload_service):
    response = anonymous_client.post(
        "/api/v1/documents",
        files={"file": ("report.pdf", b"%PDF", "application/pdf")},
    )

    assert response.status_code == 401
    assert response.json()["detail"]["kind"] == "unauthenticated"
    mock_upload_service.upload.assert_not_called()


@pytest.mark.parametrize(
    ("error", "kind"),
    [
        (InvalidFileType("image/png", "application/pdf"), "invalid_file_type"),
        (FileTooLarge(11 * 1024 * 1024, 10 * 1024 * 1024), "file_too_large"),
    ],
)
def test_upload_validation_errors_are_400(client, mock_upload_service, error, kind):
    mock_upload_service.upload.side_effect = error

    response = client.post(
        "/api/v1/documents",
        files={"file": ("x.png", b"png", "image/png")},
    )

    assert response.status_code == 400
    assert response.json()["detail"]["kind"] == kind


def test_oversized_upload_is_rejected_before_reading(app, client, mock_upload_service):
    app.dependency_overrides[get_settings_dependency] = lambda: Settings(
        uploads=UploadSettings(max_size_bytes=16)
    )

    response = client.post(
        "/api/v1/documents",
        files={"file": ("big.pdf", b"%PDF" + b"x" * 1000, "application/pdf")},
    )

    assert response.status_code == 400
    body = response.json()["detail"]
    assert body["kind"] == "file_too_large"
    assert body["details"]["limit_bytes"] == 16
    mock_upload_service.upload.assert_not_called()


async def test_upload_of_unknown_size_reads_at_most_one_byte_past_limit():
    """Without a declared size only limit + 1 bytes reach the service."""
    service = AsyncMock()
    service.upload.return_value = _document()
    file = UploadFile(
        file=io.BytesIO(b"x" * 1000),
        filename="big.pdf",
        headers=Headers({"content-type": "application/pdf"}),
    )

    await upload_document(
        file=file,
        title=None,
        is_public=False,
        identity=CALLER,
        upload_service=service,
        settings=Settings(uploads=UploadSettings(max_size_bytes=16)),
    )

    kwargs = service.upload.call_args.kwargs
    assert len(kwargs["file_bytes"]) == 17
    assert kwargs["size_bytes"] == 17


def test_get_document_not_found(client, mock_document_service):
    doc_id = uuid.uuid4()
    mock_document_service.get.side_effect = NotFound("Document", str(doc_id))

    response = client.get(f"/api/v1/documents/{doc_id}")

    assert response.status_code == 404
    body = response.json()["detail"]
    assert body["kind"] == "not_found"
    assert body["details"]["resource_id"] == str(doc_id)


def test_list_documents(anonymous_client, mock_document_service):
    mock_document_service.list.return_value = [_document(is_public=True)]

    response = anonymous_client.get("/api/v1/documents")

    assert response.status_code == 200
    assert response.json()["total"] == 1
    assert mock_document_service.list.call_args.args[0] is None


def test_patch_by_non_owner_is_403(client, mock_document_service):
    mock_document_service.update.side_effect = Forbidden()

    response = client.patch(f"/api/v1/documents/{uuid.uuid4()}", json={"is_public": True})

    assert response.status_code == 403
    assert response.json()["detail"]["kind"] == "forbidden"


def test_delete_store_failure_is_500(client, mock_document_service):
    mock_document_service.delete.side_effect = StoreUnavailable(
        "Blob store delete timed out", store="blob", operation="delete"
    )

    response = client.delete(f"/api/v1/documents/{uuid.uuid4()}")

    assert response.status_code == 500
    assert response.json()["detail"]["kind"] == "store_unavailable"


def test_unexpected_error_is_internal_error(client, mock_document_service):
    mock_document_service.get.side_effect = RuntimeError("bug")

    response = client.get(f"/api/v1/documents/{uuid.uuid4()}")

    assert response.status_code == 500
    assert response.json()["detail"]["kind"] == "internal_error"


def test_get_content_streams_pdf(client, mock_document_service):
    document = _document()
    mock_document_service.get_content.return_value = (document, b"%PDF-1.4 bytes")

    response = client.get(f"/api/v1/documents/{document.id}/content")

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.content == b"%PDF-1.4 bytes"
    assert "report.pdf" in response.headers["content-disposition"]


def test_share_reference(client, mock_sharing_service):
    doc_id = uuid.uuid4()
    mock_sharing_service.get_share_reference.return_value = ShareReference(
        document_id=doc_id, url="https://blobs.test/a.pdf", is_public=True
    )

    response = client.get(f"/api/v1/documents/{doc_id}/share")

    assert response.status_code == 200
    assert response.json()["url"] == "https://blobs.test/a.pdf"


def test_add_comment_accepts_camel_case(client, mock_comment_service):
    doc_id = uuid.uuid4()
    mock_comment_service.add.return_value = Comment(
        id=uuid.uuid4(),
        document_id=doc_id,
        author_id=CALLER.id,
        page_number=3,
        content="hi",
        created_at=datetime.now(timezone.utc),
        author_name="Caller",
        author_email=CALLER.email,
    )

    response = client.post(
        f"/api/v1/documents/{doc_id}/comments",
        json={"pageNumber": 3, "content": "hi"},
    )

    assert response.status_code == 200
    assert response.json()["author_name"] == "Caller"
    mock_comment_service.add.assert_awaited_once_with(CALLER, doc_id, 3, "hi")


def test_list_comments(anonymous_client, mock_comment_service):
    doc_id = uuid.uuid4()
    mock_comment_service.list.return_value = []

    response = anonymous_client.get(f"/api/v1/documents/{doc_id}/comments", params={"page": 2})

    assert response.status_code == 200
    assert response.json() == {
        "document_id": str(doc_id),
        "page_number": 2,
        "comments": [],
        "total": 0,
    }
