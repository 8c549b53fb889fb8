# app/database/connection.py
import logging
from typing import AsyncGenerator
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from fastapi import Depends, HTTPException, status
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool

from app.helpers import messages
from config.appconfig import settings

logger = logging.getLogger(__name__)

Base = declarative_base()


def _engine_arguments(database_url: str) -> tuple[str, dict]:
    """
    Build the engine URL and keyword arguments.

    asyncpg does not understand libpq's ``sslmode``/``channel_binding`` query
    parameters that managed Postgres providers put in their URLs, so they
    are stripped and translated to ``connect_args``.
    """
    kwargs: dict = {"echo": settings.DATABASE_ECHO}

    if database_url.startswith("sqlite"):
        # aiosqlite connections are bound to the loop that opened them
        kwargs["poolclass"] = NullPool
        return database_url, kwargs

    parts = urlsplit(database_url)
    query = dict(parse_qsl(parts.query))
    sslmode = query.pop("sslmode", None)
    query.pop("channel_binding", None)
    if sslmode and sslmode != "disable":
        kwargs["connect_args"] = {"ssl": True}

    kwargs["pool_pre_ping"] = True
    cleaned = urlunsplit(parts._replace(query=urlencode(query)))
    return cleaned, kwargs


_url, _kwargs = _engine_arguments(settings.DATABASE_URL)
engine = create_async_engine(_url, **_kwargs)

AsyncSessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding one session per request."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def init_models() -> None:
    """Create tables that do not exist yet."""
    import app.model_registry  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("✅ Database tables ready")


async def check_database_connection(db: AsyncSession) -> bool:
    """Lightweight health probe used before every CRUD request."""
    try:
        await db.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"❌ Database connection failed: {e}")
        return False


async def get_checked_db(db: AsyncSession = Depends(get_db)) -> AsyncSession:
    """Like get_db, but answers 503 when the database cannot be reached."""
    if not await check_database_connection(db):
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=messages.DB_UNAVAILABLE)
    return db
