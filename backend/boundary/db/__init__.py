"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - build_async_engine(), build_session_factory(): Async connection management
  - create_all_tables(), drop_all_tables(): Schema management
  - UserModel, AuthSessionModel, DocumentModel, CommentModel: Domain entities
  - user_crud, auth_session_crud, document_crud, comment_crud: CRUD singletons
  - commit(), rollback(): Transaction control inside the error boundary

Dependencies: sqlalchemy, backend.configs
System role: Record store adapter for users, sessions, documents and comments.
"""

from backend.boundary.db.base import Base, CreatedAtMixin, TimestampMixin, UUIDMixin
from backend.boundary.db.connection import (
    build_async_engine,
    build_session_factory,
    create_all_tables,
    drop_all_tables,
)
from backend.boundary.db.models import (
    AuthSessionModel,
    CommentModel,
    DocumentModel,
    UserModel,
)
from backend.boundary.db.CRUD import (
    AuthSessionCRUD,
    BaseCRUD,
    CommentCRUD,
    DocumentCRUD,
    UserCRUD,
    auth_session_crud,
    comment_crud,
    document_crud,
    user_crud,
)
from backend.boundary.db.transaction import commit, rollback

__all__ = [
    # Base classes
    "Base",
    "CreatedAtMixin",
    "TimestampMixin",
    "UUIDMixin",
    # Connection
    "build_async_engine",
    "build_session_factory",
    "create_all_tables",
    "drop_all_tables",
    # Models
    "UserModel",
    "AuthSessionModel",
    "DocumentModel",
    "CommentModel",
    # CRUD classes
    "BaseCRUD",
    "UserCRUD",
    "AuthSessionCRUD",
    "DocumentCRUD",
    "CommentCRUD",
    # CRUD singletons
    "user_crud",
    "auth_session_crud",
    "document_crud",
    "comment_crud",
    # Transactions
    "commit",
    "rollback",
]
