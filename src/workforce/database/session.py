from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    create_async_engine,
    async_sessionmaker,
    AsyncSession,
)

from workforce.config.settings import Settings
from workforce.database.base import Base


def create_engine(settings: Settings) -> AsyncEngine:
    """
    Build the AsyncEngine for the document store described by `settings`.
    """
    return create_async_engine(
        settings.DATABASE_URL,
        echo=settings.SQLALCHEMY_ECHO,
        future=True,
        pool_pre_ping=True,              # Enables connection health checks
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Return the session factory handed to the DocumentRepository.

    expire_on_commit=False keeps loaded documents readable after the
    repository's `session.begin()` block has committed.
    """
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def init_models(engine: AsyncEngine) -> None:
    """Create the `documents` table (and anything else on Base.metadata) if missing."""
    # import registers the model with Base.metadata
    from workforce.models import document  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
