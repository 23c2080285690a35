"""
gradebook/database.py
Async database configuration for the reference SQL collaborators
"""
import logging

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

from gradebook.config import settings
from gradebook.orm.base import Base
import gradebook.orm  # ensures all models are registered

logger = logging.getLogger(__name__)

DATABASE_URL = settings.DATABASE_URL

if not DATABASE_URL:
    raise ValueError("DATABASE_URL environment variable is not set")


def build_engine(url: str = DATABASE_URL, echo: bool = settings.SQL_ECHO):
    """
    Create an async engine.

    SQLite gets a busy timeout; other backends get a recycled pool.
    """
    if "sqlite" in url.lower():
        return create_async_engine(
            url,
            echo=echo,
            pool_pre_ping=True,
            connect_args={
                "timeout": 30.0,   # SQLite busy timeout in seconds
            }
        )
    return create_async_engine(
        url,
        echo=echo,
        pool_pre_ping=True,
        pool_size=20,
        max_overflow=30,
        pool_timeout=30,
        pool_recycle=3600,
    )


def build_session_factory(bind) -> async_sessionmaker:
    return async_sessionmaker(
        bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


engine = build_engine()
AsyncSessionLocal = build_session_factory(engine)


async def init_db(bind=None):
    """Create tables that do not exist yet. Idempotent."""
    target = bind or engine
    logger.info("Initializing database...")
    async with target.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ready")


async def close_db():
    """Close database connection"""
    await engine.dispose()
    logger.info("Database connection closed")
