"""
Auth session CRUD operations.

Dependencies: sqlalchemy, backend.boundary.db.models
System role: Bearer token session persistence
"""

from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from backend.boundary.db.CRUD.base_crud import BaseCRUD
from backend.boundary.db.models.auth_session_model import AuthSessionModel
from backend.boundary.errors import translate_errors


def _as_aware(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


class AuthSessionCRUD(BaseCRUD[AuthSessionModel]):
    """CRUD operations for AuthSessionModel."""

    def __init__(self) -> None:
        """Initialize AuthSessionCRUD with AuthSessionModel."""
        super().__init__(AuthSessionModel)

    @translate_errors("record", "select")
    async def get_active(self, session: AsyncSession, id: UUID) -> AuthSessionModel | None:
        """
        Retrieve a session that is neither revoked nor expired.

        Args:
            session: Async database session
            id: Session UUID (token jti)

        Returns:
            AuthSessionModel if active, None otherwise
        """
        stmt = select(AuthSessionModel).where(
            AuthSessionModel.id == id,
            AuthSessionModel.revoked_at.is_(None),
        )
        result = await session.execute(stmt)
        auth_session = result.scalar_one_or_none()
        if auth_session is None:
            return None
        if _as_aware(auth_session.expires_at) <= datetime.now(timezone.utc):
            return None
        return auth_session

    async def revoke(self, session: AsyncSession, id: UUID) -> bool:
        """
        Mark a session revoked.

        Returns:
            True if an active session was revoked, False if none was active
        """
        auth_session = await self.get_by_id(session, id)
        if auth_session is None or auth_session.revoked_at is not None:
            return False
        await self.update(session, auth_session, revoked_at=datetime.now(timezone.utc))
        return True


auth_session_crud = AuthSessionCRUD()
