"""Event store queries against the hosted database."""
import logging
from datetime import datetime, timedelta, timezone

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.tiers import Tier, parse_tier
from app.models.event import Event

logger = logging.getLogger(__name__)


def _warn_on_unknown_tiers(events: list[Event]) -> None:
    for event in events:
        if parse_tier(event.tier) is Tier.UNRECOGNIZED:
            logger.warning("Event %s has unrecognized tier %r", event.id, event.tier)


async def list_events(db: AsyncSession, tier: Tier | None = None) -> list[Event]:
    """All events ordered by scheduled date, earliest first."""
    query = select(Event).order_by(Event.date.asc(), Event.id.asc())
    if tier:
        query = query.where(Event.tier == tier.value)

    result = await db.execute(query)
    events = list(result.scalars().all())
    _warn_on_unknown_tiers(events)
    return events


async def get_event(db: AsyncSession, event_id: str) -> Event | None:
    result = await db.execute(select(Event).where(Event.id == event_id))
    event = result.scalar_one_or_none()
    if event is not None:
        _warn_on_unknown_tiers([event])
    return event


SAMPLE_EVENTS = [
    {
        "title": "Community Meetup",
        "description": "Open evening for everyone to meet the team.",
        "days_ahead": 3,
        "image_url": "https://images.unsplash.com/photo-1515187029135-18ee286d815b",
        "tier": Tier.FREE,
    },
    {
        "title": "Product Roadmap Q&A",
        "description": None,
        "days_ahead": 7,
        "image_url": "https://images.unsplash.com/photo-1540575467063-178a50c2df87",
        "tier": Tier.FREE,
    },
    {
        "title": "Silver Workshop: Getting Started",
        "description": "Hands-on session for silver members.",
        "days_ahead": 10,
        "image_url": "https://images.unsplash.com/photo-1524178232363-1fb2b075b655",
        "tier": Tier.SILVER,
    },
    {
        "title": "Gold Networking Dinner",
        "description": "Dinner with speakers and partners.",
        "days_ahead": 14,
        "image_url": "https://images.unsplash.com/photo-1511795409834-ef04bbd61622",
        "tier": Tier.GOLD,
    },
    {
        "title": "Platinum Founders Retreat",
        "description": "Invite-only weekend retreat.",
        "days_ahead": 30,
        "image_url": "https://images.unsplash.com/photo-1505373877841-8d25f7d46678",
        "tier": Tier.PLATINUM,
    },
]


async def seed_events(db: AsyncSession, now: datetime | None = None) -> int:
    """Insert the sample catalogue if the table is empty.

    Returns the number of events inserted.
    """
    count = await db.scalar(select(func.count()).select_from(Event))
    if count:
        logger.info("Events table already has %d rows, skipping seed", count)
        return 0

    now = now or datetime.now(timezone.utc)
    for sample in SAMPLE_EVENTS:
        db.add(Event(
            title=sample["title"],
            description=sample["description"],
            date=now + timedelta(days=sample["days_ahead"]),
            image_url=sample["image_url"],
            tier=sample["tier"].value,
        ))
    await db.flush()
    logger.info("Seeded %d events", len(SAMPLE_EVENTS))
    return len(SAMPLE_EVENTS)
