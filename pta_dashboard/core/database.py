# pta_dashboard/core/database.py
"""Database connection and session management using SQLAlchemy."""
from typing import AsyncGenerator
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool
from sqlalchemy import event, text
import logging

from .config import settings

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_conn, connection_record):
    """SQLite ignores foreign keys unless asked per connection."""
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_url: str) -> AsyncEngine:
    """Create the async engine with pool settings suited to the backend."""
    if database_url.startswith("sqlite"):
        sqlite_engine = create_async_engine(
            database_url,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
            echo=False,
        )
        event.listen(sqlite_engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        return sqlite_engine

    return create_async_engine(
        database_url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_recycle=settings.db_pool_recycle,
        pool_pre_ping=True,  # Hosted databases drop idle connections
        echo=(settings.environment == 'development'),
        connect_args={
            "server_settings": {
                "application_name": "pta_dashboard",
                "idle_in_transaction_session_timeout": "60s",
            }
        } if database_url.startswith("postgresql+asyncpg") else {},
    )


engine = build_engine(settings.database_url)

AsyncSessionLocal = async_sessionmaker(
    engine,
    expire_on_commit=False,
    class_=AsyncSession,
    autoflush=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get database session for API requests with proper error handling"""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception as e:
            logger.error(f"Database session error: {e}")
            await session.rollback()
            raise
        finally:
            await session.close()


async def health_check_db(db_engine: AsyncEngine = None) -> bool:
    """Fast health check"""
    try:
        async with (db_engine or engine).connect() as conn:
            await conn.execute(text("SELECT 1"))
            return True
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return False


async def close_db_connections():
    """Properly close all database connections"""
    await engine.dispose()
    logger.info("Database connections closed")
