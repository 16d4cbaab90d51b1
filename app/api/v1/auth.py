"""Requester identity resolution.

Sessions belong to Supabase Auth. This module only verifies the bearer token
and turns the profile's raw tier label into a ``Tier``. Anonymous requests
are allowed and resolve to the default tier.
"""
import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel

from app.config import Settings, get_settings
from app.core.tiers import DEFAULT_TIER, Tier, parse_tier
from app.integrations.supabase_auth import (
    IdentityProviderError,
    SupabaseAuthClient,
    TokenError,
    claim_at,
    get_supabase_auth_client,
)

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


class Requester(BaseModel):
    """The current viewer."""
    user_id: str | None = None
    email: str | None = None
    tier: Tier = DEFAULT_TIER
    raw_tier: str | None = None  # label as the identity provider sent it

    @property
    def is_anonymous(self) -> bool:
        return self.user_id is None


def resolve_tier(raw_label, default: Tier = DEFAULT_TIER) -> Tier:
    """Parse the provider's tier label, logging labels that don't parse."""
    tier = parse_tier(raw_label, default=default)
    if tier is Tier.UNRECOGNIZED:
        logger.warning("Unrecognized tier label %r from identity provider", raw_label)
    return tier


async def get_current_requester(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    client: SupabaseAuthClient = Depends(get_supabase_auth_client),
    settings: Settings = Depends(get_settings),
) -> Requester:
    """Resolve the requester from an optional Supabase access token."""
    if credentials is None:
        return Requester()

    try:
        claims = client.decode_token(credentials.credentials)
    except TokenError as e:
        logger.info("Rejected access token: %s", e)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user_id = claims.get("sub")
    raw_tier = claim_at(claims, settings.tier_claim)

    if raw_tier is None and user_id:
        try:
            profile = await client.get_user(user_id)
        except IdentityProviderError as e:
            logger.error("Profile lookup failed for %s: %s", user_id, e)
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail="Identity provider unavailable",
            )
        if profile:
            raw_tier = claim_at(profile, settings.tier_claim)

    return Requester(
        user_id=user_id,
        email=claims.get("email"),
        tier=resolve_tier(raw_tier),
        raw_tier=None if raw_tier is None else str(raw_tier),
    )
