"""Engine subpackage - tier resolution, quote calculation and commissions."""
from .calculator import PricingCalculator, calculate_quote
from .errors import QuoteCalculationError, InvalidQuoteInputError, NoTierMatchError
from .models import (
    Tier,
    PricedItemConfig,
    ExtraService,
    PricingConfig,
    SelectedExtra,
    QuoteInput,
    LineItem,
    CommissionItem,
    CalculatedQuote,
)
from .tier_resolver import resolve_tier, require_tier

__all__ = [
    'PricingCalculator', 'calculate_quote',
    'QuoteCalculationError', 'InvalidQuoteInputError', 'NoTierMatchError',
    'Tier', 'PricedItemConfig', 'ExtraService', 'PricingConfig',
    'SelectedExtra', 'QuoteInput', 'LineItem', 'CommissionItem', 'CalculatedQuote',
    'resolve_tier', 'require_tier',
]
