"""
Shared API state: the pricing config store.

Routes get it through FastAPI dependencies so tests can swap it out.
"""
from typing import Optional

from ..config.settings import get_settings
from ..services.pricing_store import PricingConfigStore

_store: Optional[PricingConfigStore] = None


def get_store() -> PricingConfigStore:
    """Get the process-wide pricing config store."""
    global _store
    if _store is None:
        settings = get_settings()
        _store = PricingConfigStore(settings.pricing_config, settings.default_pricing)
    return _store
