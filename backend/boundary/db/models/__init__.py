"""
Database models package.

Exports:
  - UserModel: User profile ORM model
  - AuthSessionModel: Issued bearer token sessions
  - DocumentModel: Uploaded PDF metadata
  - CommentModel: Page-scoped comments

Dependencies: sqlalchemy, backend.boundary.db.base
System role: Database model definitions for domain entities
"""

from backend.boundary.db.models.user_model import UserModel
from backend.boundary.db.models.auth_session_model import AuthSessionModel
from backend.boundary.db.models.document_model import DocumentModel
from backend.boundary.db.models.comment_model import CommentModel

__all__ = [
    "UserModel",
    "AuthSessionModel",
    "DocumentModel",
    "CommentModel",
]
