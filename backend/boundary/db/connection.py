"""
Database connection management.

Builds the async SQLAlchemy engine and session factory from explicit
settings. Nothing here is cached at module level; the application context
owns the engine and disposes it on shutdown.

Dependencies: sqlalchemy, backend.configs
System role: Database connection lifecycle management
"""

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from backend.boundary.db.base import Base
from backend.configs.database import DatabaseSettings


def build_async_engine(db_config: DatabaseSettings) -> AsyncEngine:
    """
    Create async SQLAlchemy engine with connection pooling and timeouts.

    PostgreSQL connections get asyncpg connect and per-statement timeouts so a
    stuck store call fails instead of blocking the request. pool_pre_ping=True
    verifies connections before use to detect stale/broken connections early.

    Args:
        db_config: Database settings

    Returns:
        AsyncEngine: Configured async SQLAlchemy engine

    Usage:
        engine = build_async_engine(settings.database)
        async with engine.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
    """
    if db_config.is_sqlite:
        return create_async_engine(
            db_config.async_database_url,
            echo=db_config.echo_sql,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    return create_async_engine(
        db_config.async_database_url,
        echo=db_config.echo_sql,
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_timeout=db_config.pool_timeout,
        pool_pre_ping=True,
        connect_args={
            "timeout": db_config.connect_timeout,
            "command_timeout": db_config.command_timeout,
        },
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    """
    Create async session factory for database operations.

    Returns async_sessionmaker bound to engine with autoflush=False for
    explicit transaction control; services commit once per workflow step.

    Args:
        engine: Async engine

    Returns:
        async_sessionmaker: Async session factory

    Usage:
        SessionFactory = build_session_factory(engine)
        async with SessionFactory() as session:
            session.add(obj)
            await session.commit()
    """
    return async_sessionmaker(
        bind=engine,
        autoflush=False,
        expire_on_commit=False,
    )


async def create_all_tables(engine: AsyncEngine) -> None:
    """
    Create all tables from registered ORM models.

    Idempotent: issues CREATE TABLE IF NOT EXISTS for each model.
    """
    import backend.boundary.db.models  # noqa: F401  (registers models)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_all_tables(engine: AsyncEngine) -> None:
    """Drop all tables and their data."""
    import backend.boundary.db.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
