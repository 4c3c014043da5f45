"""
User profile ORM model.

Identity records for the local session provider and display data for
comment authors.

Dependencies: sqlalchemy, backend.boundary.db.base
System role: Identity persistence
"""

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from backend.boundary.db.base import Base, TimestampMixin, UUIDMixin


class UserModel(Base, UUIDMixin, TimestampMixin):
    """
    User ORM model.

    Attributes:
        id: UUID primary key
        email: Unique, lower-cased login email
        name: Display name
        password_hash: PBKDF2 hash string
        is_active: Disabled users cannot sign in
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True, index=True)
    name: Mapped[str | None] = mapped_column(String(50), nullable=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
