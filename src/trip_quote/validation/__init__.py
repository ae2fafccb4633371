"""Validation subpackage - advisory checks on tier ladders."""
from .tiers import validate_tiers, validate_pricing_tiers

__all__ = ['validate_tiers', 'validate_pricing_tiers']
