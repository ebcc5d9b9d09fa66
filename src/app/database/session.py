"""
Engine (connection pool) and session factory construction.

The engine is owned by the application lifespan (created at startup, disposed at
shutdown). Repositories only receive the session factory and never dispose it.
"""
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    create_async_engine,
    async_sessionmaker,
    AsyncSession,
)

from app.config.settings import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    """
    Create the AsyncEngine for `settings.DATABASE_URL`.

    Every checkout waits at most DB_POOL_TIMEOUT seconds for a free connection.
    `hide_parameters=True` keeps bound values (password hashes included) out of
    DBAPIError messages.
    """
    url = make_url(settings.DATABASE_URL)
    pool_kwargs = {}
    if url.get_backend_name() != "sqlite":
        # SQLite uses a non-queue pool that rejects sizing arguments
        pool_kwargs = {
            "pool_size": settings.DB_POOL_SIZE,
            "max_overflow": settings.DB_MAX_OVERFLOW,
            "pool_timeout": settings.DB_POOL_TIMEOUT,
        }

    return create_async_engine(
        url,
        echo=settings.SQLALCHEMY_ECHO,
        pool_pre_ping=True,
        hide_parameters=True,
        **pool_kwargs,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False: entities stay readable after the per-operation commit
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
