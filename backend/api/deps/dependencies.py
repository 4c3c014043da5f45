"""
Dependency injection container.

Factory functions for FastAPI dependencies. Every resource is read from the
AppContext attached to the running application; nothing is cached globally.

Dependencies: fastapi, backend.api.context, backend.application
System role: DI container for service injection
"""

import logging
from typing import AsyncGenerator

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from backend.api.context import AppContext
from backend.application.services import (
    AuthService,
    CommentService,
    DocumentService,
    SharingService,
    UploadService,
)
from backend.configs import Settings
from backend.core.exceptions import Unauthenticated
from backend.models.identity import Identity

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_app_context(request: Request) -> AppContext:
    """Get the context of the application serving this request."""
    return request.app.state.context


def get_settings_dependency(context: AppContext = Depends(get_app_context)) -> Settings:
    """Get settings of the running application."""
    return context.settings


async def get_async_db(
    context: AppContext = Depends(get_app_context),
) -> AsyncGenerator[AsyncSession, None]:
    """
    Yield a request-scoped database session.

    Uncommitted work is rolled back when the session closes, so a request that
    fails midway leaves no partial writes behind.
    """
    async with context.session_factory() as session:
        yield session


def get_auth_service(
    db: AsyncSession = Depends(get_async_db),
    context: AppContext = Depends(get_app_context),
) -> AuthService:
    """
    Get auth service instance.

    Args:
        db: Async database session (injected via Depends)
        context: Application context

    Returns:
        AuthService: Auth service instance
    """
    return AuthService(db=db, token_codec=context.token_codec, settings=context.settings.auth)


def get_upload_service(
    db: AsyncSession = Depends(get_async_db),
    context: AppContext = Depends(get_app_context),
) -> UploadService:
    """Get upload service instance."""
    return UploadService(db=db, blob_store=context.blob_store, settings=context.settings.uploads)


def get_sharing_service(
    db: AsyncSession = Depends(get_async_db),
    context: AppContext = Depends(get_app_context),
) -> SharingService:
    """Get sharing service instance."""
    return SharingService(
        db=db,
        blob_store=context.blob_store,
        policy=context.access_policy(),
        signed_url_ttl=context.settings.blob_storage.signed_url_ttl,
    )


def get_document_service(
    db: AsyncSession = Depends(get_async_db),
    context: AppContext = Depends(get_app_context),
    sharing: SharingService = Depends(get_sharing_service),
) -> DocumentService:
    """
    Get document service instance.

    Args:
        db: Async database session (injected via Depends)
        context: Application context
        sharing: Sharing service on the same session

    Returns:
        DocumentService: Document service instance
    """
    return DocumentService(
        db=db,
        blob_store=context.blob_store,
        policy=context.access_policy(),
        sharing=sharing,
    )


def get_comment_service(
    db: AsyncSession = Depends(get_async_db),
    context: AppContext = Depends(get_app_context),
) -> CommentService:
    """Get comment service instance."""
    return CommentService(db=db, policy=context.access_policy())


def get_bearer_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str | None:
    """Raw bearer token of the request, if any."""
    if credentials is None or not credentials.credentials:
        return None
    return credentials.credentials


async def get_optional_identity(
    token: str | None = Depends(get_bearer_token),
    auth_service: AuthService = Depends(get_auth_service),
) -> Identity | None:
    """
    Resolve the caller, or None for anonymous requests.

    A token that is present but invalid is rejected rather than silently
    downgraded to anonymous.

    Raises:
        Unauthenticated: Token present but invalid, expired or revoked
    """
    if token is None:
        return None
    return await auth_service.resolve(token)


async def require_identity(
    identity: Identity | None = Depends(get_optional_identity),
) -> Identity:
    """
    Resolve the caller; anonymous requests are rejected.

    Raises:
        Unauthenticated: No token supplied
    """
    if identity is None:
        raise Unauthenticated()
    return identity
