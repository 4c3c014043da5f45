"""Service orchestrators."""

from .access_policy import DocumentAccessPolicy
from .auth_service import AuthService
from .comment_service import CommentService
from .document_service import DocumentService
from .sharing_service import SharingService
from .upload_service import UploadService

__all__ = [
    "AuthService",
    "CommentService",
    "DocumentAccessPolicy",
    "DocumentService",
    "SharingService",
    "UploadService",
]
