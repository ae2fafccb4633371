"""
Tier Resolver - finds the price tier that applies to a traveller count.

Declaration order is trusted: the first tier whose range contains the
count wins, even when a later tier is narrower. Ladders are never sorted
here; sorting belongs to the validator only.
"""
from typing import Iterable, Optional

from .errors import NoTierMatchError
from .models import Tier


def resolve_tier(tiers: Iterable[Tier], people_count: int) -> Optional[Tier]:
    """Return the first declared tier covering people_count, or None."""
    for tier in tiers:
        if tier.contains(people_count):
            return tier
    return None


def require_tier(component: str, tiers: Iterable[Tier], people_count: int) -> Tier:
    """Like resolve_tier, but a missing tier is a calculation failure."""
    tier = resolve_tier(tiers, people_count)
    if tier is None:
        raise NoTierMatchError(component, people_count)
    return tier
