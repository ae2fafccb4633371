import pytest

from trip_quote.config.settings import PACKAGE_DATA
from trip_quote.engine.models import (
    ExtraService,
    PricedItemConfig,
    PricingConfig,
    QuoteInput,
    Tier,
)
from trip_quote.services.pricing_store import PricingConfigStore

DEFAULT_PRICING = PACKAGE_DATA / 'default_pricing.json'
DEFAULT_QUOTE = PACKAGE_DATA / 'default_quote.json'


def make_pricing() -> PricingConfig:
    """Small hand-checked configuration used across the engine tests."""
    return PricingConfig(
        hotel={
            "budget": PricedItemConfig("per_person", "per_day", [
                Tier(1, 5, 100.0),
                Tier(6, 10, 80.0),
                Tier(11, None, 70.0),
            ]),
            "premium": PricedItemConfig("per_person", "per_day", [
                Tier(1, 10, 150.0),
                Tier(11, None, 130.0),
            ]),
            # Short ladder: nothing above 4 people
            "luxury": PricedItemConfig("per_person", "per_day", [
                Tier(1, 4, 300.0),
            ]),
        },
        dinner=PricedItemConfig("per_person", "per_day", [
            Tier(1, 10, 25.5),
            Tier(11, None, 20.0),
        ]),
        guide=PricedItemConfig("per_group", "per_day", [
            Tier(1, 10, 120.0),
            Tier(11, None, 180.0),
        ]),
        flight=PricedItemConfig("per_person", "per_trip", [
            Tier(1, None, 499.99),
        ]),
        coverage_max_people=10,
        extras=[
            ExtraService("transfer", "Airport transfer", "Flughafentransfer", 60.0, "per_group", "per_trip"),
            ExtraService("museum", "Museum pass", "Museumspass", 12.5, "per_person", "per_piece"),
            ExtraService("driver", "Private driver", "Privatfahrer", 90.0, "per_group", "per_day"),
        ],
    )


def make_quote(**overrides) -> QuoteInput:
    data = dict(
        client_name="Acme Travel",
        quote_number="Q-2026-018",
        date="2026-03-05",
        people_count=2,
        days=5,
        hotel_tier="budget",
    )
    data.update(overrides)
    return QuoteInput(**data)


@pytest.fixture
def pricing():
    return make_pricing()


@pytest.fixture
def quote_factory():
    return make_quote


@pytest.fixture
def store(tmp_path):
    """Store writing into a temp dir, falling back to the bundled default."""
    return PricingConfigStore(tmp_path / 'pricingConfig.json', DEFAULT_PRICING)
