"""
Tier ladder validation for the pricing editor.

Works on a sorted copy of the ladder, unlike the resolver which trusts
declaration order. Defects are advisory text; nothing here raises.
"""
from typing import Sequence

from ..engine.labels import normalize_locale
from ..engine.models import SECTION_TARGETS, PricingConfig, Tier

MESSAGES = {
    'en': {
        'add_one_tier': "Add at least one tier",
        'start_from_one': "Ranges must start from 1",
        'max_less_than_min': "Tier starting at {min}: max must not be less than min",
        'overlap': "Overlap between ranges",
        'cover_up_to': "Ranges must cover up to {max} people",
    },
    'de': {
        'add_one_tier': "Mindestens eine Staffel anlegen",
        'start_from_one': "Bereiche müssen bei 1 beginnen",
        'max_less_than_min': "Staffel ab {min}: Maximum darf nicht kleiner als Minimum sein",
        'overlap': "Überschneidung zwischen Bereichen",
        'cover_up_to': "Bereiche müssen bis {max} Personen abdecken",
    },
}


def validate_tiers(tiers: Sequence[Tier], coverage_max_people: int, locale: str = "en") -> list[str]:
    """
    Validate a tier ladder against the declared coverage.

    Returns defect messages in order; an empty list means the ladder is valid.
    Only the first overlap is reported.
    """
    msg = MESSAGES[normalize_locale(locale)]
    errors = []

    if not tiers:
        errors.append(msg['add_one_tier'])
        return errors

    ordered = sorted(tiers, key=lambda t: t.min_people)

    if ordered[0].min_people > 1:
        errors.append(msg['start_from_one'])

    for tier in ordered:
        if tier.max_people is not None and tier.max_people < tier.min_people:
            errors.append(msg['max_less_than_min'].format(min=tier.min_people))

    for prev, tier in zip(ordered, ordered[1:]):
        prev_max = prev.max_people if prev.max_people is not None else float('inf')
        if prev_max >= tier.min_people:
            errors.append(msg['overlap'])
            break

    last = ordered[-1]
    if last.max_people is not None and last.max_people < coverage_max_people:
        errors.append(msg['cover_up_to'].format(max=coverage_max_people))

    return errors


def validate_pricing_tiers(pricing: PricingConfig, locale: str = "en") -> dict[str, list[str]]:
    """Run validate_tiers for every priced section. Sections without defects are omitted."""
    report = {}
    for target in SECTION_TARGETS:
        errors = validate_tiers(pricing.section(target).tiers, pricing.coverage_max_people, locale)
        if errors:
            report[target] = errors
    return report
