"""Seed the events table with sample data.

Usage: python -m app.seed
"""
import asyncio
import logging

from app.config import get_settings
from app.database import async_session_maker, engine, Base
from app.services.event_store import seed_events

logger = logging.getLogger(__name__)


async def main() -> int:
    settings = get_settings()
    if "sqlite" in settings.database_url:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async with async_session_maker() as session:
        inserted = await seed_events(session)
        await session.commit()
    await engine.dispose()
    return inserted


if __name__ == "__main__":
    logging.basicConfig(level=get_settings().log_level)
    inserted = asyncio.run(main())
    print(f"Inserted {inserted} events")
