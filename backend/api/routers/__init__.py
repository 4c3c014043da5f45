"""API routers."""

from .auth import router as auth_router
from .comments import router as comments_router
from .documents import router as documents_router  # Now imports from documents/ package
from .health import router as health_router

__all__ = [
    "auth_router",
    "comments_router",
    "documents_router",
    "health_router",
]
