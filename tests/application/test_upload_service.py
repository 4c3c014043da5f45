"""
Test suite for UploadService.

Runs against in-memory SQLite and an in-memory blob store.

System role: Verification of the upload workflow and its compensation
"""

from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy import func, select

from backend.application.services.upload_service import UploadService
from backend.boundary.db.models.document_model import DocumentModel
from backend.configs.uploads import UploadSettings
from backend.core.exceptions import (
    Conflict,
    FileTooLarge,
    InvalidFileType,
    StoreUnavailable,
    Unauthenticated,
    ValidationError,
)


@pytest.fixture
def upload_service(test_async_db, blob_store) -> UploadService:
    """Provide UploadService with a 1 KiB limit."""
    return UploadService(
        db=test_async_db,
        blob_store=blob_store,
        settings=UploadSettings(max_size_bytes=1024, allowed_mime_type="application/pdf"),
    )


async def _document_count(db) -> int:
    return (await db.execute(select(func.count()).select_from(DocumentModel))).scalar_one()


class TestUploadSuccess:
    """Valid uploads."""

    async def test_upload_stores_blob_and_record(
        self, upload_service, test_async_db, blob_store, owner, pdf_bytes
    ) -> None:
        """Uploaded bytes are retrievable at the record's blob path."""
        # Act
        document = await upload_service.upload(
            owner, pdf_bytes, "application/pdf", "My Notes.pdf", len(pdf_bytes)
        )

        # Assert
        assert document.owner_id == owner.id
        assert document.is_public is False
        assert document.size == len(pdf_bytes)
        assert document.title == "My Notes.pdf"
        assert document.original_name == "My Notes.pdf"
        assert document.blob_path.startswith(f"{owner.id}/")
        assert document.blob_path.endswith("-MyNotes.pdf")
        assert blob_store.objects[document.blob_path] == (pdf_bytes, "application/pdf")
        assert await _document_count(test_async_db) == 1

    async def test_upload_honours_title_and_visibility(
        self, upload_service, owner, pdf_bytes
    ) -> None:
        document = await upload_service.upload(
            owner,
            pdf_bytes,
            "application/pdf",
            "a.pdf",
            len(pdf_bytes),
            title="  Quarterly report ",
            is_public=True,
        )

        assert document.title == "Quarterly report"
        assert document.is_public is True

    async def test_blank_title_falls_back_to_filename(self, upload_service, owner, pdf_bytes) -> None:
        document = await upload_service.upload(
            owner, pdf_bytes, "application/pdf", "x.pdf", len(pdf_bytes), title="   "
        )

        assert document.title == "x.pdf"

    async def test_same_filename_twice_gives_two_documents(
        self, upload_service, test_async_db, owner, pdf_bytes
    ) -> None:
        first = await upload_service.upload(owner, pdf_bytes, "application/pdf", "dup.pdf", len(pdf_bytes))
        second = await upload_service.upload(owner, pdf_bytes, "application/pdf", "dup.pdf", len(pdf_bytes))

        assert first.blob_path != second.blob_path
        assert await _document_count(test_async_db) == 2

    @pytest.mark.parametrize("is_public", [True, False])
    async def test_blob_readability_matches_visibility(
        self, upload_service, blob_store, owner, pdf_bytes, is_public
    ) -> None:
        """Only public uploads are stored world-readable."""
        document = await upload_service.upload(
            owner, pdf_bytes, "application/pdf", "v.pdf", len(pdf_bytes), is_public=is_public
        )

        assert (document.blob_path in blob_store.public) is is_public

    async def test_long_filename_fits_record_columns(self, upload_service, owner, pdf_bytes) -> None:
        """A 300-character name is shortened instead of overflowing the row."""
        filename = "q" * 300 + ".pdf"

        document = await upload_service.upload(
            owner, pdf_bytes, "application/pdf", filename, len(pdf_bytes)
        )

        assert len(document.original_name) == 255
        assert document.original_name.endswith(".pdf")
        assert document.title == document.original_name
        assert len(document.blob_path.split("/", 1)[1]) <= 13 + 1 + 8 + 1 + 200


class TestUploadRejection:
    """Rejected uploads leave both stores untouched."""

    async def test_anonymous_upload_is_unauthenticated(
        self, upload_service, test_async_db, blob_store, pdf_bytes
    ) -> None:
        with pytest.raises(Unauthenticated):
            await upload_service.upload(None, pdf_bytes, "application/pdf", "a.pdf", len(pdf_bytes))

        assert blob_store.objects == {}
        assert await _document_count(test_async_db) == 0

    @pytest.mark.parametrize("mime_type", ["image/png", "text/plain", None, "application/PDF+x"])
    async def test_non_pdf_is_invalid_file_type(
        self, upload_service, test_async_db, blob_store, owner, mime_type
    ) -> None:
        with pytest.raises(InvalidFileType) as exc_info:
            await upload_service.upload(owner, b"data", mime_type, "a.png", 4)

        assert isinstance(exc_info.value, ValidationError)
        assert blob_store.calls == []
        assert await _document_count(test_async_db) == 0

    async def test_oversized_file_is_too_large(
        self, upload_service, test_async_db, blob_store, owner
    ) -> None:
        data = b"x" * 1025

        with pytest.raises(FileTooLarge) as exc_info:
            await upload_service.upload(owner, data, "application/pdf", "big.pdf", len(data))

        assert exc_info.value.details["limit_bytes"] == 1024
        assert blob_store.calls == []
        assert await _document_count(test_async_db) == 0

    async def test_file_at_limit_is_accepted(self, upload_service, owner) -> None:
        data = b"x" * 1024

        document = await upload_service.upload(owner, data, "application/pdf", "edge.pdf", 1024)

        assert document.size == 1024

    async def test_empty_file_is_rejected(self, upload_service, blob_store, owner) -> None:
        with pytest.raises(ValidationError):
            await upload_service.upload(owner, b"", "application/pdf", "empty.pdf", 0)

        assert blob_store.calls == []

    async def test_size_mismatch_is_rejected(self, upload_service, blob_store, owner) -> None:
        with pytest.raises(ValidationError):
            await upload_service.upload(owner, b"abc", "application/pdf", "a.pdf", 10)

        assert blob_store.calls == []

    async def test_overlong_title_is_rejected(
        self, upload_service, test_async_db, blob_store, owner, pdf_bytes
    ) -> None:
        with pytest.raises(ValidationError) as exc_info:
            await upload_service.upload(
                owner, pdf_bytes, "application/pdf", "a.pdf", len(pdf_bytes), title="t" * 256
            )

        assert exc_info.value.details["field"] == "title"
        assert blob_store.calls == []
        assert await _document_count(test_async_db) == 0


class TestUploadFailures:
    """Store failures during upload."""

    async def test_blob_failure_writes_no_record(
        self, upload_service, test_async_db, blob_store, owner, pdf_bytes
    ) -> None:
        blob_store.fail_on.add("upload")

        with pytest.raises(StoreUnavailable):
            await upload_service.upload(owner, pdf_bytes, "application/pdf", "a.pdf", len(pdf_bytes))

        assert await _document_count(test_async_db) == 0

    async def test_record_failure_removes_orphaned_blob(
        self, upload_service, blob_store, owner, pdf_bytes
    ) -> None:
        """Insert fails after the blob was written: blob is compensated away."""
        failing_create = AsyncMock(side_effect=Conflict("duplicate blob path"))

        with patch(
            "backend.application.services.upload_service.document_crud.create",
            failing_create,
        ):
            with pytest.raises(Conflict) as exc_info:
                await upload_service.upload(owner, pdf_bytes, "application/pdf", "a.pdf", len(pdf_bytes))

        assert blob_store.objects == {}
        assert [op for op, _ in blob_store.calls] == ["upload", "delete"]
        assert "orphaned_blob_path" not in exc_info.value.details

    async def test_failed_compensation_is_reported_not_raised(
        self, upload_service, blob_store, owner, pdf_bytes
    ) -> None:
        """The original error surfaces, carrying the orphaned path."""
        blob_store.fail_on.add("delete")
        failing_create = AsyncMock(
            side_effect=StoreUnavailable("insert timed out", store="record", operation="insert")
        )

        with patch(
            "backend.application.services.upload_service.document_crud.create",
            failing_create,
        ):
            with pytest.raises(StoreUnavailable) as exc_info:
                await upload_service.upload(owner, pdf_bytes, "application/pdf", "a.pdf", len(pdf_bytes))

        error = exc_info.value
        assert error.details["store"] == "record"
        assert error.details["orphaned_blob_path"] in blob_store.objects
