"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use. The singletons are
stateless; the database session is always passed per call.

Usage:
    from backend.boundary.db.CRUD import document_crud, comment_crud

    document = await document_crud.get_by_id(db, document_id)
"""

from backend.boundary.db.CRUD.base_crud import BaseCRUD
from backend.boundary.db.CRUD.user_crud import UserCRUD, user_crud
from backend.boundary.db.CRUD.auth_session_crud import AuthSessionCRUD, auth_session_crud
from backend.boundary.db.CRUD.document_crud import DocumentCRUD, document_crud
from backend.boundary.db.CRUD.comment_crud import CommentCRUD, comment_crud

__all__ = [
    "BaseCRUD",
    "UserCRUD",
    "user_crud",
    "AuthSessionCRUD",
    "auth_session_crud",
    "DocumentCRUD",
    "document_crud",
    "CommentCRUD",
    "comment_crud",
]
