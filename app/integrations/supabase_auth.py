"""Supabase Auth client for requester profiles.

Uses:
- JWT verification: access tokens issued by Supabase Auth (HS256, project secret)
- Admin API: user profile lookup when the token carries no tier claim

Admin lookups need the service role key and are skipped without it.
"""
import logging
from typing import Any

import httpx
import jwt

from app.config import get_settings

logger = logging.getLogger(__name__)


class TokenError(Exception):
    """Access token could not be verified."""


class IdentityProviderError(Exception):
    """Supabase Auth could not be reached or answered with an error."""


def claim_at(payload: dict, path: str) -> Any:
    """Read a dotted claim path such as ``app_metadata.tier``."""
    value: Any = payload
    for part in path.split("."):
        if not isinstance(value, dict):
            return None
        value = value.get(part)
    return value


class SupabaseAuthClient:
    """Client for Supabase Auth.

    Token verification is local; only the profile fallback hits the network.
    """

    def __init__(self, transport: httpx.AsyncBaseTransport | None = None):
        settings = get_settings()
        self._transport = transport
        self._url = settings.supabase_url.rstrip("/")
        self._service_key = settings.supabase_service_key
        self._jwt_secret = settings.supabase_jwt_secret
        self._audience = settings.supabase_jwt_audience
        self._algorithm = settings.algorithm

    @property
    def can_fetch_profiles(self) -> bool:
        return bool(self._url and self._service_key)

    def decode_token(self, token: str) -> dict:
        """Verify signature, expiry and audience; return the claims."""
        try:
            return jwt.decode(
                token,
                self._jwt_secret,
                algorithms=[self._algorithm],
                audience=self._audience,
            )
        except jwt.PyJWTError as e:
            raise TokenError(str(e)) from e

    async def _admin_request(self, endpoint: str) -> Any:
        """Make request to the Auth admin API (service role key)."""
        headers = {
            "apikey": self._service_key,
            "Authorization": f"Bearer {self._service_key}",
        }
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.get(
                    f"{self._url}/auth/v1{endpoint}",
                    headers=headers,
                    timeout=10.0,
                )
                response.raise_for_status()
                return response.json()
        except httpx.HTTPError as e:
            raise IdentityProviderError(f"Supabase Auth request failed: {e}") from e

    async def get_user(self, user_id: str) -> dict | None:
        """Fetch a user profile by id. None when profile lookups are disabled."""
        if not self.can_fetch_profiles:
            return None
        return await self._admin_request(f"/admin/users/{user_id}")


# Singleton
_client: SupabaseAuthClient | None = None


def get_supabase_auth_client() -> SupabaseAuthClient:
    """Get or create Supabase Auth client singleton."""
    global _client
    if _client is None:
        _client = SupabaseAuthClient()
    return _client
