"""Database connection with Supabase PostgreSQL support."""
import logging

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from app.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()


def build_engine_kwargs(database_url: str, echo: bool = False) -> dict:
    """Engine options for the given URL.

    Supabase's pgbouncer runs in transaction pooling mode, so connections are
    not pooled client-side and prepared statements are disabled.
    """
    engine_kwargs = {"echo": echo}
    if "postgresql" in database_url:
        engine_kwargs["poolclass"] = NullPool
        engine_kwargs["connect_args"] = {
            "statement_cache_size": 0,
            "prepared_statement_cache_size": 0,
        }
    return engine_kwargs


engine = create_async_engine(
    settings.database_url,
    **build_engine_kwargs(settings.database_url, echo=settings.debug and settings.is_development),
)

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


async def get_db() -> AsyncSession:
    """Dependency to get database session."""
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db():
    """Create tables for local SQLite development.

    Against Supabase the schema is owned by the hosted project's migrations.
    """
    if settings.is_development and "sqlite" in settings.database_url:
        logger.info("Creating tables on %s", settings.database_url)
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
