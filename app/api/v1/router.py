"""Main API v1 router."""
from fastapi import APIRouter

from app.api.v1 import events, health, tiers

router = APIRouter()

router.include_router(health.router, tags=["health"])
router.include_router(events.router, prefix="/events", tags=["events"])
router.include_router(tiers.router, prefix="/tiers", tags=["tiers"])
