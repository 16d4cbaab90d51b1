"""Database models."""
from app.models.event import Event

__all__ = [
    "Event",
]
