"""
Transaction helpers.

Commit and rollback wrapped in the store error boundary so services can
sequence multi-step workflows without touching driver exceptions.

Dependencies: sqlalchemy, backend.boundary.errors
System role: Record store transaction control
"""

from sqlalchemy.ext.asyncio import AsyncSession

from backend.boundary.errors import translate_errors


@translate_errors("record", "commit")
async def commit(session: AsyncSession) -> None:
    """Commit the current transaction."""
    await session.commit()


@translate_errors("record", "rollback")
async def rollback(session: AsyncSession) -> None:
    """Roll back the current transaction."""
    await session.rollback()
