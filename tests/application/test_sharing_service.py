"""
Test suite for SharingService.

System role: Verification of the visibility state machine and share links
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from backend.application.services.sharing_service import SharingService
from backend.application.services.upload_service import UploadService
from backend.boundary.db.CRUD.document_crud import document_crud
from backend.core.exceptions import Forbidden, NotFound, StoreUnavailable, Unauthenticated


@pytest.fixture
def sharing_service(test_async_db, blob_store) -> SharingService:
    """Provide SharingService with a 10 minute signed URL lifetime."""
    return SharingService(db=test_async_db, blob_store=blob_store, signed_url_ttl=600)


@pytest.fixture
async def document(test_async_db, blob_store, owner, pdf_bytes):
    """Private document uploaded by ``owner``."""
    service = UploadService(db=test_async_db, blob_store=blob_store)
    return await service.upload(owner, pdf_bytes, "application/pdf", "shared.pdf", len(pdf_bytes))


class TestSetPublic:
    """Visibility transitions."""

    async def test_owner_toggles_visibility(self, sharing_service, owner, document) -> None:
        published = await sharing_service.set_public(owner, document.id, True)
        assert published.is_public is True

        unpublished = await sharing_service.set_public(owner, document.id, False)
        assert unpublished.is_public is False

    async def test_set_public_is_idempotent(self, sharing_service, owner, document) -> None:
        """Second identical call succeeds without writing."""
        first = await sharing_service.set_public(owner, document.id, True)

        with patch(
            "backend.application.services.sharing_service.document_crud.update",
            AsyncMock(),
        ) as update:
            second = await sharing_service.set_public(owner, document.id, True)

        update.assert_not_called()
        assert first.is_public is second.is_public is True
        assert second.updated_at == first.updated_at

    async def test_non_owner_is_forbidden(self, sharing_service, other_user, document) -> None:
        with pytest.raises(Forbidden):
            await sharing_service.set_public(other_user, document.id, True)

    async def test_anonymous_is_unauthenticated(self, sharing_service, document) -> None:
        with pytest.raises(Unauthenticated):
            await sharing_service.set_public(None, document.id, True)


class TestBlobVisibility:
    """The blob's readability follows the record flag."""

    async def test_publish_and_unpublish_switch_blob(
        self, sharing_service, blob_store, owner, document
    ) -> None:
        await sharing_service.set_public(owner, document.id, True)
        assert document.blob_path in blob_store.public

        await sharing_service.set_public(owner, document.id, False)
        assert document.blob_path not in blob_store.public

    async def test_blob_failure_leaves_record_private(
        self, sharing_service, test_async_db, blob_store, owner, document
    ) -> None:
        blob_store.fail_on.add("set_visibility")

        with pytest.raises(StoreUnavailable):
            await sharing_service.set_public(owner, document.id, True)

        stored = await document_crud.get_by_id(test_async_db, document.id)
        assert stored.is_public is False
        assert document.blob_path not in blob_store.public

    async def test_commit_failure_restores_blob(
        self, sharing_service, test_async_db, blob_store, owner, document
    ) -> None:
        failing_commit = AsyncMock(
            side_effect=StoreUnavailable("commit timed out", store="record", operation="commit")
        )

        with patch("backend.application.services.sharing_service.commit", failing_commit):
            with pytest.raises(StoreUnavailable):
                await sharing_service.set_public(owner, document.id, True)

        stored = await document_crud.get_by_id(test_async_db, document.id)
        assert stored.is_public is False
        assert document.blob_path not in blob_store.public

    async def test_failed_restore_is_reported(
        self, sharing_service, blob_store, owner, document
    ) -> None:
        """The commit error surfaces, naming the blob left public."""
        failing_commit = AsyncMock(
            side_effect=StoreUnavailable("commit timed out", store="record", operation="commit")
        )
        set_visibility = MagicMock(
            side_effect=[None, StoreUnavailable("acl timed out", store="blob", operation="set_visibility")]
        )

        with patch("backend.application.services.sharing_service.commit", failing_commit):
            with patch.object(blob_store, "set_visibility", set_visibility):
                with pytest.raises(StoreUnavailable) as exc_info:
                    await sharing_service.set_public(owner, document.id, True)

        assert exc_info.value.details["store"] == "record"
        assert exc_info.value.details["inconsistent_blob_path"] == document.blob_path
        assert set_visibility.call_args_list[1].args == (document.blob_path, False)


class TestShareReference:
    """Share links."""

    async def test_public_document_gets_durable_url(
        self, sharing_service, blob_store, owner, other_user, document
    ) -> None:
        await sharing_service.set_public(owner, document.id, True)

        reference = await sharing_service.get_share_reference(other_user, document.id)

        assert reference.is_public is True
        assert reference.expires_at is None
        assert reference.url == f"{blob_store.public_base_url}/{document.blob_path}"
        assert document.blob_path in reference.url

    async def test_private_document_gets_signed_url_for_owner(
        self, sharing_service, owner, document
    ) -> None:
        reference = await sharing_service.get_share_reference(owner, document.id)

        assert reference.is_public is False
        assert reference.expires_at is not None
        assert "expires=600" in reference.url

    async def test_private_document_has_no_link_for_others(
        self, sharing_service, blob_store, other_user, document
    ) -> None:
        with pytest.raises(NotFound):
            await sharing_service.get_share_reference(other_user, document.id)
        with pytest.raises(NotFound):
            await sharing_service.get_share_reference(None, document.id)

        assert [op for op, _ in blob_store.calls if op == "signed_url"] == []

    async def test_signing_failure_is_store_unavailable(
        self, sharing_service, blob_store, owner, document
    ) -> None:
        blob_store.fail_on.add("signed_url")

        with pytest.raises(StoreUnavailable):
            await sharing_service.get_share_reference(owner, document.id)
