"""Tier endpoints."""
from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel

from app.api.v1.auth import Requester, get_current_requester
from app.config import Settings, get_settings
from app.core.rate_limiting import current_limit, limiter
from app.core.tiers import TIER_ORDER, Tier
from app.services.tier_access import accessible_tiers

router = APIRouter()


class ViewerTiers(BaseModel):
    tier: Tier
    raw_tier: str | None
    anonymous: bool
    accessible_tiers: list[Tier]


@router.get("", response_model=list[Tier])
@limiter.limit(current_limit)
async def list_tiers(request: Request):
    """Canonical tier ordering, lowest first."""
    return list(TIER_ORDER)


@router.get("/me", response_model=ViewerTiers)
@limiter.limit(current_limit)
async def my_tiers(
    request: Request,
    requester: Requester = Depends(get_current_requester),
    settings: Settings = Depends(get_settings),
):
    """The viewer's tier and every tier it can access."""
    return ViewerTiers(
        tier=requester.tier,
        raw_tier=requester.raw_tier,
        anonymous=requester.is_anonymous,
        accessible_tiers=accessible_tiers(requester.tier, settings.unrecognized_tier_policy),
    )
