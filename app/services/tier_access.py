"""Tier access evaluation.

Pure decision functions: given the requester's tier they answer which tiers
are viewable and whether a given event is locked. No I/O, no state; safe to
call once per event per request from any number of workers.

Raw strings are accepted and parsed with ``parse_tier``. A missing requester
label has already been resolved to ``free`` at the identity boundary; what
reaches here as ``Tier.UNRECOGNIZED`` is a label that was present but
invalid, and its treatment is decided by ``UnrecognizedTierPolicy``:

- ``DENY`` (default): the requester sits below ``free``. No tier is
  accessible and every event, ``free`` ones included, is locked.
- ``TREAT_AS_FREE``: the requester gets exactly the access of ``free``.
"""
from app.core.tiers import (
    TIER_ORDER,
    Tier,
    UnrecognizedTierPolicy,
    parse_tier,
    tier_position,
)


def _requester_position(
    requester_tier: "Tier | str | None",
    policy: UnrecognizedTierPolicy,
) -> int:
    tier = parse_tier(requester_tier)
    if tier is Tier.UNRECOGNIZED:
        if policy is UnrecognizedTierPolicy.TREAT_AS_FREE:
            return tier_position(Tier.FREE)
        return -1
    return tier_position(tier)


def accessible_tiers(
    requester_tier: "Tier | str | None",
    unrecognized_policy: UnrecognizedTierPolicy = UnrecognizedTierPolicy.DENY,
) -> list[Tier]:
    """Tiers the requester may view, lowest first.

    Always a contiguous prefix of ``TIER_ORDER``.

    >>> accessible_tiers("gold")
    [<Tier.FREE: 'free'>, <Tier.SILVER: 'silver'>, <Tier.GOLD: 'gold'>]
    """
    position = _requester_position(requester_tier, unrecognized_policy)
    return list(TIER_ORDER[:position + 1])


def is_locked(
    event_tier: "Tier | str",
    requester_tier: "Tier | str | None",
    unrecognized_policy: UnrecognizedTierPolicy = UnrecognizedTierPolicy.DENY,
) -> bool:
    """True iff the event's tier ranks strictly above the requester's."""
    event_position = tier_position(parse_tier(event_tier))
    return event_position > _requester_position(requester_tier, unrecognized_policy)


def upgrade_target(
    event_tier: "Tier | str",
    requester_tier: "Tier | str | None",
    unrecognized_policy: UnrecognizedTierPolicy = UnrecognizedTierPolicy.DENY,
) -> Tier | None:
    """Tier the requester needs to unlock the event, or None if unlocked."""
    if not is_locked(event_tier, requester_tier, unrecognized_policy):
        return None
    return parse_tier(event_tier)
