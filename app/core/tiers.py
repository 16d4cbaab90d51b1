"""Membership tier definitions."""
from enum import Enum


class Tier(str, Enum):
    """Membership tiers, declared in ascending order of privilege.

    ``UNRECOGNIZED`` is never stored; it is what ``parse_tier`` returns for a
    label outside the four canonical values.
    """
    FREE = "free"
    SILVER = "silver"
    GOLD = "gold"
    PLATINUM = "platinum"
    UNRECOGNIZED = "unrecognized"


class UnrecognizedTierPolicy(str, Enum):
    """How a requester with an unrecognized tier is treated."""
    DENY = "deny"                    # no accessible tiers, every event locked
    TREAT_AS_FREE = "treat_as_free"  # same access as a free requester


TIER_ORDER: tuple[Tier, ...] = (Tier.FREE, Tier.SILVER, Tier.GOLD, Tier.PLATINUM)

DEFAULT_TIER = Tier.FREE


def parse_tier(label: "str | Tier | None", default: Tier = DEFAULT_TIER) -> Tier:
    """Parse a raw tier label from the identity provider or event store.

    A missing label resolves to ``default``; a label that is present but not
    one of the canonical values resolves to ``Tier.UNRECOGNIZED``.
    """
    if isinstance(label, Tier):
        return label
    if label is None:
        return default
    value = str(label).strip().lower()
    if not value:
        return default
    for tier in TIER_ORDER:
        if tier.value == value:
            return tier
    return Tier.UNRECOGNIZED


def tier_position(tier: Tier) -> int:
    """Ordinal position in ``TIER_ORDER``; -1 for an unrecognized tier."""
    if tier is Tier.UNRECOGNIZED:
        return -1
    return TIER_ORDER.index(tier)
