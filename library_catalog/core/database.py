"""
Store engine and session factory.
"""

from fastapi import Request
from sqlalchemy import event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from library_catalog.core.config import Settings
from library_catalog.core.exceptions import DatabaseException
from library_catalog.core.logger_config import logger
from library_catalog.models import Base


def create_db_engine(settings: Settings) -> AsyncEngine:
    """
    Create the async engine shared by every request for the lifetime of the process.

    No connection is opened here; the first store operation connects lazily.
    """
    logger.info(f"Creating database engine for {settings.DATABASE_URL.split('@')[-1]}")
    engine = create_async_engine(settings.DATABASE_URL, echo=settings.DB_ECHO, future=True, pool_pre_ping=True)

    if engine.dialect.name == "sqlite":
        # SQLite ignores foreign keys unless asked per connection
        @event.listens_for(engine.sync_engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


async def init_db(engine: AsyncEngine) -> None:
    """
    Create all tables that do not exist yet.
    """
    logger.info("Initializing database...")
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except SQLAlchemyError as e:
        logger.error(f"Error during database initialization: {e}")
        raise DatabaseException(f"Could not initialize the database: {e}") from e
    logger.success("Database initialized successfully.")


async def close_db_connection(engine: AsyncEngine) -> None:
    await engine.dispose()
    logger.info("Database connection closed")


def get_session_factory(request: Request) -> async_sessionmaker[AsyncSession]:
    """
    Dependency returning the application's session factory.
    """
    return request.app.state.session_factory
