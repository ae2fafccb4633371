"""
Locale phrasing for titles and pricing notes.

Only picks human-readable labels; nothing here affects a computed value.
"""

SUPPORTED_LOCALES = ('en', 'de')
DEFAULT_LOCALE = 'en'

_LABELS = {
    'en': {
        'per_person': 'per person',
        'per_group': 'per group',
        'per_day': 'per day',
        'per_trip': 'per trip',
        'per_piece': 'per piece',
        'per_night': 'per night',
        'tier_range': 'tier {min}-{max} people',
        'tier_open': 'tier {min}+ people',
        'hotel_budget': 'Hotel (budget)',
        'hotel_premium': 'Hotel (premium)',
        'hotel_luxury': 'Hotel (luxury)',
        'dinner': 'Dinner',
        'guide': 'Guide',
        'flight': 'International flight',
        'commission_local_agency': 'Local agency commission',
        'commission_jinn': 'Jinn commission',
    },
    'de': {
        'per_person': 'pro Person',
        'per_group': 'pro Gruppe',
        'per_day': 'pro Tag',
        'per_trip': 'pro Reise',
        'per_piece': 'pro Stück',
        'per_night': 'pro Nacht',
        'tier_range': 'Staffel {min}-{max} Personen',
        'tier_open': 'Staffel {min}+ Personen',
        'hotel_budget': 'Hotel (Budget)',
        'hotel_premium': 'Hotel (Premium)',
        'hotel_luxury': 'Hotel (Luxus)',
        'dinner': 'Abendessen',
        'guide': 'Reiseleitung',
        'flight': 'Internationaler Flug',
        'commission_local_agency': 'Provision lokale Agentur',
        'commission_jinn': 'Jinn-Provision',
    },
}


def normalize_locale(locale: str | None) -> str:
    """Anything other than 'de' falls back to English."""
    return 'de' if (locale or '').strip().lower() == 'de' else DEFAULT_LOCALE


def label(key: str, locale: str = DEFAULT_LOCALE) -> str:
    return _LABELS[normalize_locale(locale)][key]


def tier_label(min_people: int, max_people: int | None, locale: str = DEFAULT_LOCALE) -> str:
    if max_people:
        return label('tier_range', locale).format(min=min_people, max=max_people)
    return label('tier_open', locale).format(min=min_people)
