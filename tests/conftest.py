"""
Shared test fixtures and configuration for entire test suite.

Provides: in-memory SQLite database, in-memory blob store doubles with fault
injection, seeded users and identities, sample PDF bytes
Dependencies: pytest, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest

from backend.core.exceptions import NotFound, StoreUnavailable
from backend.models.identity import Identity

PDF_BYTES = b"%PDF-1.4\n1 0 obj\n<< >>\nendobj\ntrailer\n<< >>\n%%EOF\n"


class InMemoryBlobStore:
    """
    Dict-backed blob store double.

    ``fail_on`` names operations ("upload", "download", "delete",
    "set_visibility", "signed_url") that raise StoreUnavailable, the way a
    timed-out S3 call surfaces. ``public`` holds the paths readable by anyone.
    """

    def __init__(self, public_base_url: str = "https://blobs.test/documents") -> None:
        self.objects: dict[str, tuple[bytes, str]] = {}
        self.public_base_url = public_base_url
        self.public: set[str] = set()
        self.fail_on: set[str] = set()
        self.calls: list[tuple[str, str]] = []

    def _maybe_fail(self, operation: str, blob_path: str) -> None:
        self.calls.append((operation, blob_path))
        if operation in self.fail_on:
            raise StoreUnavailable(
                f"Blob store {operation} timed out",
                store="blob",
                operation=operation,
            )

    def upload(
        self, blob_path: str, data: bytes, content_type: str, is_public: bool = False
    ) -> None:
        self._maybe_fail("upload", blob_path)
        self.objects[blob_path] = (data, content_type)
        if is_public:
            self.public.add(blob_path)

    def set_visibility(self, blob_path: str, is_public: bool) -> None:
        self._maybe_fail("set_visibility", blob_path)
        if is_public:
            self.public.add(blob_path)
        else:
            self.public.discard(blob_path)

    def download(self, blob_path: str) -> bytes:
        self._maybe_fail("download", blob_path)
        if blob_path not in self.objects:
            raise NotFound("Blob", blob_path)
        return self.objects[blob_path][0]

    def delete(self, blob_path: str) -> None:
        self._maybe_fail("delete", blob_path)
        self.objects.pop(blob_path, None)
        self.public.discard(blob_path)

    def public_url(self, blob_path: str) -> str:
        return f"{self.public_base_url}/{blob_path}"

    def signed_url(self, blob_path: str, expires_in: int = 3600) -> tuple[str, datetime]:
        self._maybe_fail("signed_url", blob_path)
        expires_at = datetime.now(timezone.utc) + timedelta(seconds=expires_in)
        return f"{self.public_base_url}/{blob_path}?signature=test&expires={expires_in}", expires_at


@pytest.fixture
async def test_async_db():
    """
    Create in-memory SQLite async database for testing.

    Yields:
        AsyncSession: Test database session with cleanup (lazy imported to avoid settings issues)
    """
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
    from sqlalchemy.pool import StaticPool

    from backend.boundary.db.base import Base
    import backend.boundary.db.models  # noqa: F401

    # Use SQLite in-memory database for tests
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    # Create session factory
    async_session = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    # Create session for test
    async with async_session() as session:
        yield session
        await session.rollback()

    # Cleanup
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def blob_store() -> InMemoryBlobStore:
    """Provide an empty in-memory blob store."""
    return InMemoryBlobStore()


@pytest.fixture
def pdf_bytes() -> bytes:
    """Provide minimal PDF content."""
    return PDF_BYTES


async def _seed_user(db, email: str, name: str | None) -> Identity:
    from backend.boundary.db.CRUD.user_crud import user_crud

    user = await user_crud.create(db, email=email, name=name, password_hash="unused")
    await db.commit()
    return Identity(id=user.id, email=user.email, name=user.name)


@pytest.fixture
async def owner(test_async_db) -> Identity:
    """Seeded user who uploads documents."""
    return await _seed_user(test_async_db, "owner@example.com", "Olive Owner")


@pytest.fixture
async def other_user(test_async_db) -> Identity:
    """Seeded user who does not own the test documents."""
    return await _seed_user(test_async_db, "reader@example.com", "Rey Reader")


@pytest.fixture
def stranger() -> Identity:
    """Identity with no backing user row."""
    return Identity(id=uuid.uuid4(), email="ghost@example.com", name=None)
