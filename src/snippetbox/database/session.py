from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    create_async_engine,
    async_sessionmaker,
    AsyncSession,
)

from snippetbox.config.settings import Settings
from .base import Base


def build_engine(settings: Settings) -> AsyncEngine:
    """
    Create the AsyncEngine (and with it the connection pool) for one process.

    Called once by the app factory; the engine is then handed to whoever needs it.
    """
    return create_async_engine(
        settings.DATABASE_URL,
        echo=settings.SQLALCHEMY_ECHO,
        pool_pre_ping=True,              # Enables connection health checks
    )


def build_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Session factory shared by the stores.

    expire_on_commit=False keeps attributes loaded after commit, so rows can be
    copied into records once the transaction is over.
    """
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def create_schema(engine: AsyncEngine) -> None:
    """Create all tables registered on Base.metadata (no-op for existing ones)."""
    # models must be imported so their tables are registered
    from snippetbox import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

