"""
Pytest configuration and shared fixtures for TierEvents tests.
"""
import os
import time
from datetime import datetime, timedelta, timezone

# Settings are cached on first import; pin the test environment before that.
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("SUPABASE_URL", "")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret-for-hs256-signing-0123")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

import jwt
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.config import get_settings
from app.core.tiers import Tier
from app.database import Base, get_db
from app.main import app
from app.models.event import Event

BASE_DATE = datetime(2030, 1, 1, 18, 0, tzinfo=timezone.utc)


@pytest.fixture
async def engine():
    """Fresh in-memory SQLite database per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_maker):
    async with session_maker() as session:
        yield session


@pytest.fixture
async def client(session_maker):
    """HTTP client against the app with the database swapped for the test one."""

    async def override_get_db():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def events(session_maker):
    """One event per tier, scheduled out of insertion order."""
    rows = [
        Event(id="evt-gold", title="Gold Dinner", description="Dinner",
              date=BASE_DATE + timedelta(days=3), image_url="https://img.test/gold.png",
              tier=Tier.GOLD.value),
        Event(id="evt-free", title="Meetup", description=None,
              date=BASE_DATE, image_url="https://img.test/free.png",
              tier=Tier.FREE.value),
        Event(id="evt-platinum", title="Retreat", description="Weekend",
              date=BASE_DATE + timedelta(days=10), image_url="https://img.test/platinum.png",
              tier=Tier.PLATINUM.value),
        Event(id="evt-silver", title="Workshop", description="Hands-on",
              date=BASE_DATE + timedelta(days=1), image_url="https://img.test/silver.png",
              tier=Tier.SILVER.value),
    ]
    async with session_maker() as session:
        session.add_all(rows)
        await session.commit()
    return rows


@pytest.fixture
def make_token():
    """Build a Supabase-style access token signed with the test secret."""
    settings = get_settings()

    def _make(tier=None, sub="user-123", expires_in=3600, claims=None, secret=None):
        payload = {
            "sub": sub,
            "email": f"{sub}@example.com",
            "aud": settings.supabase_jwt_audience,
            "role": "authenticated",
            "exp": int(time.time()) + expires_in,
            "app_metadata": {"provider": "email"},
        }
        if tier is not None:
            payload["app_metadata"]["tier"] = tier
        if claims:
            payload.update(claims)
        return jwt.encode(payload, secret or settings.supabase_jwt_secret, algorithm=settings.algorithm)

    return _make


@pytest.fixture
def auth_header(make_token):
    def _header(**kwargs):
        return {"Authorization": f"Bearer {make_token(**kwargs)}"}
    return _header
