"""Event endpoints.

Every event is returned regardless of the viewer's tier. Events above the
viewer's tier come back with ``locked`` set so the frontend can render them
dimmed with an upgrade prompt.
"""
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.auth import Requester, get_current_requester
from app.config import Settings, get_settings
from app.core.rate_limiting import current_limit, limiter
from app.core.tiers import Tier
from app.database import get_db
from app.models.event import Event
from app.services import event_store
from app.services.tier_access import is_locked, upgrade_target

router = APIRouter()


class EventResponse(BaseModel):
    """Event response model."""
    id: str
    title: str
    description: str | None
    date: datetime
    image_url: str
    tier: str

    # Viewer-specific
    locked: bool = False
    upgrade_to: Tier | None = None

    class Config:
        from_attributes = True


class EventList(BaseModel):
    """All events, earliest first."""
    items: list[EventResponse]
    total: int
    viewer_tier: Tier


def _to_response(event: Event, requester: Requester, settings: Settings) -> EventResponse:
    policy = settings.unrecognized_tier_policy
    response = EventResponse.model_validate(event)
    response.locked = is_locked(event.tier, requester.tier, policy)
    response.upgrade_to = upgrade_target(event.tier, requester.tier, policy)
    return response


@router.get("", response_model=EventList)
@limiter.limit(current_limit)
async def list_events(
    request: Request,
    tier: Tier | None = Query(None, description="Only events requiring this tier"),
    db: AsyncSession = Depends(get_db),
    requester: Requester = Depends(get_current_requester),
    settings: Settings = Depends(get_settings),
):
    """List events ordered by date, each flagged locked or unlocked."""
    if tier is Tier.UNRECOGNIZED:
        raise HTTPException(status_code=422, detail="Unknown tier filter")

    events = await event_store.list_events(db, tier=tier)
    return EventList(
        items=[_to_response(e, requester, settings) for e in events],
        total=len(events),
        viewer_tier=requester.tier,
    )


@router.get("/{event_id}", response_model=EventResponse)
@limiter.limit(current_limit)
async def get_event(
    request: Request,
    event_id: str,
    db: AsyncSession = Depends(get_db),
    requester: Requester = Depends(get_current_requester),
    settings: Settings = Depends(get_settings),
):
    """Get a single event by ID."""
    event = await event_store.get_event(db, event_id)

    if not event:
        raise HTTPException(status_code=404, detail="Event not found")

    return _to_response(event, requester, settings)
