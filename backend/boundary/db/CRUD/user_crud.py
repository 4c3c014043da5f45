"""
User CRUD operations.

Lookup by email for signin/signup and batched lookup by id for comment
author enrichment.

Dependencies: sqlalchemy, backend.boundary.db.models
System role: Identity persistence operations
"""

from typing import Iterable, Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from backend.boundary.db.CRUD.base_crud import BaseCRUD
from backend.boundary.db.models.user_model import UserModel
from backend.boundary.errors import translate_errors


class UserCRUD(BaseCRUD[UserModel]):
    """CRUD operations for UserModel."""

    def __init__(self) -> None:
        """Initialize UserCRUD with UserModel."""
        super().__init__(UserModel)

    @translate_errors("record", "select")
    async def get_by_email(self, session: AsyncSession, email: str) -> UserModel | None:
        """
        Retrieve a user by (case-insensitive) email.

        Args:
            session: Async database session
            email: Login email

        Returns:
            UserModel if found, None otherwise
        """
        stmt = select(UserModel).where(UserModel.email == email.strip().lower())
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @translate_errors("record", "select")
    async def get_many(
        self,
        session: AsyncSession,
        ids: Iterable[UUID],
    ) -> Sequence[UserModel]:
        """
        Retrieve several users in a single query.

        Args:
            session: Async database session
            ids: User UUIDs (duplicates allowed)

        Returns:
            Sequence of the UserModels that exist
        """
        unique_ids = list(set(ids))
        if not unique_ids:
            return []
        stmt = select(UserModel).where(UserModel.id.in_(unique_ids))
        result = await session.execute(stmt)
        return result.scalars().all()


user_crud = UserCRUD()
