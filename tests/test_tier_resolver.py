import pytest

from trip_quote.engine import NoTierMatchError, Tier, require_tier, resolve_tier


def test_first_declared_tier_wins_over_narrower_later_tier():
    """Overlapping ladder: declaration order decides, not specificity."""
    tiers = [Tier(1, 10, 100.0), Tier(5, 8, 50.0)]
    assert resolve_tier(tiers, 6).price == 100.0


def test_declaration_order_is_not_sorted():
    tiers = [Tier(6, None, 80.0), Tier(1, 5, 100.0)]
    assert resolve_tier(tiers, 3).price == 100.0
    assert resolve_tier(tiers, 6).price == 80.0
    # Input list keeps its order
    assert [t.min_people for t in tiers] == [6, 1]


def test_open_ended_tier_covers_everything_above_min():
    tiers = [Tier(1, 5, 100.0), Tier(6, None, 80.0)]
    assert resolve_tier(tiers, 500).price == 80.0


def test_bounds_are_inclusive():
    tiers = [Tier(2, 4, 10.0)]
    assert resolve_tier(tiers, 2) is not None
    assert resolve_tier(tiers, 4) is not None
    assert resolve_tier(tiers, 1) is None
    assert resolve_tier(tiers, 5) is None


def test_empty_ladder_resolves_nothing():
    assert resolve_tier([], 1) is None


def test_require_tier_raises_with_component_and_count():
    with pytest.raises(NoTierMatchError) as exc_info:
        require_tier("hotel_luxury", [Tier(1, 4, 300.0)], 5)

    err = exc_info.value
    assert err.code == "NO_TIER_MATCH"
    assert err.component == "hotel_luxury"
    assert err.people_count == 5
    assert err.to_dict()["component"] == "hotel_luxury"
