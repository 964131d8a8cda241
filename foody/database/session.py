"""
Asynchronous database session management for FastAPI
SQLite runs through aiosqlite with WAL mode; any async URL works via DATABASE_URL
"""
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy import event
from foody.config import DATABASE_URL


engine = create_async_engine(
    DATABASE_URL,
    echo=False,
    connect_args={"check_same_thread": False} if "sqlite" in DATABASE_URL else {},
)


def set_sqlite_pragma(dbapi_connection, connection_record):
    """Enable WAL, foreign keys, and reasonable performance options"""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL;")
    cursor.execute("PRAGMA synchronous = NORMAL;")
    cursor.execute("PRAGMA foreign_keys = ON;")
    cursor.close()


if "sqlite" in DATABASE_URL:
    event.listen(engine.sync_engine, "connect", set_sqlite_pragma)


AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    autoflush=False,
    expire_on_commit=False,
)


async def get_db():
    """
    Provides a new async database session per request.
    Closes it automatically when the request is done.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


async def init_models():
    """Create all tables that do not exist yet"""
    from foody.database.base import Base
    import foody.database.models  # noqa: F401  registers every model on Base.metadata

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
