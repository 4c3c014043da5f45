"""
Auth session ORM model.

One row per issued bearer token; signout revokes it.

Dependencies: sqlalchemy, backend.boundary.db.base
System role: Session persistence for the identity layer
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from backend.boundary.db.base import Base, CreatedAtMixin, UUIDMixin


class AuthSessionModel(Base, UUIDMixin, CreatedAtMixin):
    """
    Auth session ORM model.

    Attributes:
        id: Session id, embedded in the token as ``jti``
        user_id: Signed-in user
        expires_at: Token expiry (UTC)
        revoked_at: Set on signout; revoked sessions never resolve
    """

    __tablename__ = "auth_sessions"

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    revoked_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
    )
