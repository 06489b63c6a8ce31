"""Database engine and session management.

The engine is created once when the application starts (see the lifespan in
``portfolio.main``) and disposed on shutdown. Request handlers receive a
session through the ``get_db`` dependency and roll it back when they raise.

Write handlers commit explicitly (``portfolio.crud.commit``) before building
their response. The commit in ``get_db`` runs after the response may already
have been sent, so it only covers read-only requests and is a no-op after an
explicit commit.
"""
import logging
from collections.abc import AsyncGenerator
from uuid import uuid4

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from portfolio.config import get_settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


_engine: AsyncEngine | None = None
_session_maker: async_sessionmaker[AsyncSession] | None = None


async def init_db(database_url: str | None = None) -> None:
    """Create the process-wide engine and session factory, then create tables."""
    global _engine, _session_maker
    settings = get_settings()
    url = database_url or settings.database_url
    _engine = create_async_engine(url, pool_pre_ping=True, echo=settings.sql_echo)
    _session_maker = async_sessionmaker(
        bind=_engine, expire_on_commit=False, autoflush=False, class_=AsyncSession
    )

    import portfolio.models  # noqa: F401  registers every table on Base.metadata

    async with _engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database initialised (%s)", _engine.url.render_as_string(hide_password=True))


async def close_db() -> None:
    global _engine, _session_maker
    if _engine is not None:
        await _engine.dispose()
        logger.info("Database engine disposed")
    _engine = None
    _session_maker = None


def get_session_maker() -> async_sessionmaker[AsyncSession]:
    if _session_maker is None:
        raise RuntimeError("Database is not initialised; call init_db() first")
    return _session_maker


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with get_session_maker()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


def new_id() -> str:
    """Opaque identifier assigned to every record at creation."""
    return str(uuid4())
