"""Cent rounding shared by every monetary value the engine produces."""
from decimal import Decimal, ROUND_HALF_UP

CENT = Decimal("0.01")


def round2(value: float) -> float:
    """
    Round to 2 decimal places, half up.

    Goes through the shortest repr of the float so that 1.005 rounds
    to 1.01 instead of drifting down with the binary value.
    """
    return float(Decimal(repr(float(value))).quantize(CENT, rounding=ROUND_HALF_UP))
