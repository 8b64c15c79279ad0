"""
Database configuration and session management.

This module contains the SQLAlchemy async engine, the declarative Base and
the session factory used by request handlers and bulk workers. The schema
itself is managed by Alembic migrations.
"""

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from dengue_watch.config import settings

database_url = settings.SQLALCHEMY_DATABASE_URI
if database_url.startswith("postgresql://"):
    database_url = database_url.replace("postgresql://", "postgresql+asyncpg://")

engine_options = {"echo": settings.DB_ECHO, "future": True}
if not database_url.startswith("sqlite"):
    # Every bulk worker holds its own connection, so the pool has to cover them all
    engine_options.update(
        pool_size=settings.BULK_WORKER_COUNT,
        max_overflow=settings.BULK_WORKER_COUNT,
        pool_pre_ping=True,
    )

engine = create_async_engine(database_url, **engine_options)

# Session factory shared by request handlers and bulk workers
async_session = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

# Base class for all database models
Base = declarative_base()


async def get_db() -> AsyncSession:
    """
    Dependency function to get database session.

    Yields an async database session and ensures proper cleanup. The engine
    only reads, so the session is rolled back rather than committed.
    """
    async with async_session() as session:
        try:
            yield session
        finally:
            await session.rollback()

