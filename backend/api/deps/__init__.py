"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    get_app_context,
    get_async_db,
    get_auth_service,
    get_bearer_token,
    get_comment_service,
    get_document_service,
    get_optional_identity,
    get_settings_dependency,
    get_sharing_service,
    get_upload_service,
    require_identity,
)

__all__ = [
    "get_app_context",
    "get_async_db",
    "get_auth_service",
    "get_bearer_token",
    "get_comment_service",
    "get_document_service",
    "get_optional_identity",
    "get_settings_dependency",
    "get_sharing_service",
    "get_upload_service",
    "require_identity",
]
