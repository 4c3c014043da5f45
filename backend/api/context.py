"""
Application context.

Everything a request handler needs that outlives a single request: settings,
the blob store, the database engine and session factory, and the token codec.
One context is built per application (in the lifespan, or handed to
``create_app`` by tests) and hung on ``app.state``; there are no module-level
client singletons.

Dependencies: sqlalchemy, backend.boundary, backend.configs, backend.core
System role: Per-application resource container
"""

import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker

from backend.application.services.access_policy import DocumentAccessPolicy
from backend.boundary.aws.s3_client import S3BlobStore
from backend.boundary.blob_store import BlobStore
from backend.boundary.db.connection import build_async_engine, build_session_factory
from backend.configs import Settings
from backend.core.security import TokenCodec

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Long-lived resources shared by all requests of one application."""

    settings: Settings
    blob_store: BlobStore
    engine: AsyncEngine
    session_factory: async_sessionmaker
    token_codec: TokenCodec

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        blob_store: BlobStore | None = None,
    ) -> "AppContext":
        """
        Build a context from settings.

        Args:
            settings: Application settings
            blob_store: Blob store override (S3 from settings if None)

        Returns:
            AppContext: Ready-to-use context
        """
        engine = build_async_engine(settings.database)
        logger.info(
            "Application context built",
            extra={
                "environment": settings.environment,
                "bucket": settings.blob_storage.bucket,
            },
        )
        return cls(
            settings=settings,
            blob_store=blob_store or S3BlobStore.from_settings(settings.blob_storage),
            engine=engine,
            session_factory=build_session_factory(engine),
            token_codec=TokenCodec(
                secret=settings.auth.jwt_secret,
                algorithm=settings.auth.jwt_algorithm,
                ttl_seconds=settings.auth.token_ttl_seconds,
            ),
        )

    def access_policy(self) -> DocumentAccessPolicy:
        """Access policy configured for this application."""
        return DocumentAccessPolicy(
            conceal_private_documents=self.settings.access.conceal_private_documents,
        )

    async def dispose(self) -> None:
        """Close pooled database connections."""
        await self.engine.dispose()
