"""Event model."""
import uuid
from datetime import datetime

from sqlalchemy import String, DateTime, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from app.core.tiers import Tier
from app.database import Base


class Event(Base):
    """A scheduled event gated by a membership tier.

    Rows are owned by the hosted database; the service only reads them
    (seeding aside).
    """

    __tablename__ = "events"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4())
    )
    title: Mapped[str] = mapped_column(String(255))
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)
    image_url: Mapped[str] = mapped_column(String(1024))
    tier: Mapped[str] = mapped_column(String(20), default=Tier.FREE.value, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now()
    )
