"""
Trip Quote Package

Pricing engine for group trip quotes.
Resolves tiered prices per component, stacks commissions, and numbers quotes.
"""

__version__ = "1.0.0"
