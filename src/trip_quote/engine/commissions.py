"""
Commission Engine - stacks percentage commissions on the base total.

Each commission is taken from the base total independently, never from
another commission or from the running total.
"""
from typing import Optional

from . import labels
from .models import CommissionItem
from .money import round2

LOCAL_AGENCY_KEY = "commission_local_agency"
JINN_KEY = "commission_jinn"


def _clamp_rate(rate: Optional[float]) -> float:
    return max(0.0, float(rate or 0))


def apply_commissions(
    base_total: float,
    local_agency_pct: Optional[float],
    jinn_pct: Optional[float],
    locale: str = "en",
) -> tuple[list[CommissionItem], float, float]:
    """
    Apply local agency then platform commission to base_total.

    Returns (commission_items, commission_total, total). A rate <= 0 is
    left out of commission_items entirely.
    """
    items = []
    for key, rate in ((LOCAL_AGENCY_KEY, local_agency_pct), (JINN_KEY, jinn_pct)):
        rate_pct = _clamp_rate(rate)
        if rate_pct <= 0:
            continue
        items.append(CommissionItem(
            key=key,
            title=labels.label(key, locale),
            rate_pct=rate_pct,
            amount=round2(base_total * rate_pct / 100),
        ))

    commission_total = round2(sum(item.amount for item in items))
    total = round2(base_total + commission_total)
    return items, commission_total, total
