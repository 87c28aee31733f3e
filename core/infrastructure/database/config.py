"""
Database configuration.

Manages engine creation, session factory and schema initialization.
"""
import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine

from core.settings.sections.database import DatabaseSettings


logger = logging.getLogger(__name__)


# =============================================================================
# ENGINE CREATION
# =============================================================================

def create_engine(settings: Optional[DatabaseSettings] = None) -> AsyncEngine:
    """
    Create async SQLAlchemy engine.

    Args:
        settings: Database settings (loaded from environment if omitted)

    Returns:
        Configured async engine
    """
    settings = settings or DatabaseSettings()
    logger.info(f"Creating database engine: {settings.database_url}")

    options = {"echo": settings.echo_sql}
    if settings.isolation_level:
        options["isolation_level"] = settings.isolation_level

    if not settings.database_url.startswith("sqlite"):
        options.update(
            pool_size=settings.pool_size,
            max_overflow=settings.max_overflow,
            pool_timeout=settings.pool_timeout,
            pool_recycle=settings.pool_recycle,
            pool_pre_ping=True,  # Test connections before using
        )

    return create_async_engine(settings.database_url, **options)


# Global engine instance
engine: Optional[AsyncEngine] = None


def get_engine() -> AsyncEngine:
    """
    Get or create global engine instance.

    Returns:
        Global async engine
    """
    global engine

    if engine is None:
        engine = create_engine()

    return engine


# =============================================================================
# SESSION FACTORY
# =============================================================================

def get_session_factory(bind: Optional[AsyncEngine] = None) -> async_sessionmaker:
    """
    Get session factory.

    Args:
        bind: Engine to bind (global engine if omitted)

    Returns:
        Session factory for creating sessions
    """
    return async_sessionmaker(
        bind=bind or get_engine(),
        expire_on_commit=False,
        autoflush=False,
    )


# =============================================================================
# DATABASE INITIALIZATION
# =============================================================================

async def init_database(bind: Optional[AsyncEngine] = None) -> None:
    """
    Initialize database.

    Creates all tables if they don't exist.
    """
    from core.data.models import Base

    logger.info("Initializing database...")

    async with (bind or get_engine()).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database initialized")


async def close_database() -> None:
    """Close database connections."""
    global engine

    if engine:
        logger.info("Closing database connections...")
        await engine.dispose()
        engine = None
        logger.info("Database connections closed")
