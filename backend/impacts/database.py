import logging
from typing import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from impacts.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()


def enable_sqlite_foreign_keys(async_engine) -> None:
    """SQLite leaves foreign keys unenforced unless asked on every connection."""
    if async_engine.dialect.name != "sqlite":
        return

    @event.listens_for(async_engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


engine = create_async_engine(settings.database_url, echo=settings.sql_echo, future=True)
enable_sqlite_foreign_keys(engine)

async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

Base = declarative_base()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency yielding one session per request.
    Commits when the handler returns, rolls back if it raises.
    """
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


def upsert(db: AsyncSession, model):
    """
    Return a dialect-specific INSERT for `model` that supports ON CONFLICT.
    Only PostgreSQL and SQLite have a native upsert we rely on.
    """
    dialect = db.get_bind().dialect.name
    if dialect == "postgresql":
        return postgresql.insert(model)
    if dialect == "sqlite":
        return sqlite.insert(model)
    logger.error("Upsert requested on unsupported dialect %s", dialect)
    raise NotImplementedError(f"Upsert is not supported for dialect '{dialect}'")
