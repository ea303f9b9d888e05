import logging
from typing import AsyncGenerator

from sqlalchemy import MetaData, event
from sqlalchemy.orm import declarative_base
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine, async_sessionmaker, AsyncSession

from settings.config import get_settings

# Alembic-friendly naming convention to ensure stable constraint names
naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=naming_convention)
Base = declarative_base(metadata=metadata)

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE rules unless asked per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _make_engine() -> AsyncEngine:
    """
    Create SQLAlchemy ASYNC engine from settings (psycopg3 in deployments, aiosqlite in tests).
    """
    settings = get_settings()
    url = settings.build_database_url()
    engine = create_async_engine(
        url,
        pool_pre_ping=True,  # Validate connections before use
        echo=settings.DEBUG,
    )
    if engine.dialect.name == "sqlite":
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    logger.info("SQLAlchemy async engine created (dialect=%s)", engine.dialect.name)
    return engine


# Session factory and engine are module-level singletons
engine = _make_engine()
SessionLocal = async_sessionmaker(bind=engine, autoflush=False, class_=AsyncSession, expire_on_commit=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that yields an Async SQLAlchemy session and ensures it's closed.
    Services open their own transaction on it with `async with db.begin()`.
    """
    async with SessionLocal() as db:
        yield db
