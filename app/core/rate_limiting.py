"""Request rate limiting.

One limiter for the whole app, keyed by client address. Routes opt in with
``@limiter.limit(current_limit)``; storage is in-process memory.
"""
from slowapi import Limiter
from slowapi.util import get_remote_address

from app.config import get_settings


def current_limit() -> str:
    """Per-client limit, read from settings on every request."""
    return get_settings().rate_limit


limiter = Limiter(
    key_func=get_remote_address,
    enabled=get_settings().rate_limit_enabled,
)
