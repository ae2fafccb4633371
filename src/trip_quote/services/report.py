"""
Quote report - prepares a calculated quote for the printable document.

This is the rendering boundary: amounts come straight from the
CalculatedQuote, only presentation changes here. Accommodation is shown
as an approximate nightly count (person-nights / people) rather than the
raw quantity. Turning the HTML into a PDF happens outside this package.
"""
import math
import re
from dataclasses import dataclass, field
from datetime import date as date_type
from typing import Optional

from jinja2 import Environment, PackageLoader, select_autoescape

from ..engine.labels import label, normalize_locale
from ..engine.models import CalculatedQuote, QuoteInput

TIER_PREFIX = re.compile(r'^(tier|Staffel)[^,]*,\s*', re.IGNORECASE)
UNSAFE_FILE_CHARS = re.compile(r'[^a-zA-Z0-9\-_]+')

MONTHS = {
    'en': ['January', 'February', 'March', 'April', 'May', 'June', 'July',
           'August', 'September', 'October', 'November', 'December'],
    'de': ['Januar', 'Februar', 'März', 'April', 'Mai', 'Juni', 'Juli',
           'August', 'September', 'Oktober', 'November', 'Dezember'],
}

REPORT_LABELS = {
    'en': {
        'title': 'Travel Quote',
        'header': 'Quote',
        'trip_info': 'Trip information',
        'people_count': 'People',
        'days': 'Days',
        'quote_number': 'Quote number',
        'date': 'Date',
        'trip_summary': 'Trip summary',
        'hotel_tier': 'Hotel',
        'dinner_included': 'Dinner included',
        'guide_included': 'Guide included',
        'flight_included': 'International flight',
        'yes': 'Yes',
        'no': 'No',
        'included_services': 'Included services',
        'item': 'Item',
        'details': 'Details',
        'qty': 'Qty',
        'subtotal_per_traveler': 'Price per traveller',
        'total': 'Total',
        'total_includes': 'All taxes and service fees included.',
    },
    'de': {
        'title': 'Reiseangebot',
        'header': 'Angebot',
        'trip_info': 'Reiseinformationen',
        'people_count': 'Personen',
        'days': 'Tage',
        'quote_number': 'Angebotsnummer',
        'date': 'Datum',
        'trip_summary': 'Reiseübersicht',
        'hotel_tier': 'Hotel',
        'dinner_included': 'Abendessen inklusive',
        'guide_included': 'Reiseleitung inklusive',
        'flight_included': 'Internationaler Flug',
        'yes': 'Ja',
        'no': 'Nein',
        'included_services': 'Enthaltene Leistungen',
        'item': 'Leistung',
        'details': 'Details',
        'qty': 'Anz.',
        'subtotal_per_traveler': 'Preis pro Reisendem',
        'total': 'Gesamt',
        'total_includes': 'Alle Steuern und Servicegebühren inklusive.',
    },
}


def format_currency(value: float, locale: str = "en") -> str:
    """EUR with two decimals: €1,234.50 (en) or 1.234,50 € (de)."""
    text = f"{abs(value):,.2f}"
    sign = "-" if value < 0 else ""
    if normalize_locale(locale) == 'de':
        text = text.replace(",", "_").replace(".", ",").replace("_", ".")
        return f"{sign}{text} €"
    return f"{sign}€{text}"


def format_date(value: str, locale: str = "en") -> str:
    """Long date: March 5, 2026 (en) or 5. März 2026 (de). Unparsable input is returned as-is."""
    try:
        parsed = date_type.fromisoformat(value[:10])
    except (TypeError, ValueError):
        return value
    loc = normalize_locale(locale)
    month = MONTHS[loc][parsed.month - 1]
    if loc == 'de':
        return f"{parsed.day}. {month} {parsed.year}"
    return f"{month} {parsed.day}, {parsed.year}"


def strip_tier_prefix(notes: str) -> str:
    """Drop the leading 'tier 1-5 people, ' part of a pricing note."""
    return TIER_PREFIX.sub('', notes)


def safe_file_segment(value: str) -> str:
    return UNSAFE_FILE_CHARS.sub('_', value)[:40]


@dataclass
class ReportRow:
    """One row of the included-services table."""
    title: str
    details: str
    qty: int


@dataclass
class QuoteReport:
    """Everything the printable document needs, already localized."""
    locale: str
    quote: QuoteInput
    rows: list[ReportRow]
    subtotal_per_traveller: float
    total: float
    file_name: str
    labels: dict = field(default_factory=dict)
    hotel_label: str = ""
    formatted_date: str = ""
    formatted_subtotal_per_traveller: str = ""
    formatted_total: str = ""


def build_report_rows(quote: QuoteInput, calculated: CalculatedQuote) -> list[ReportRow]:
    rows = []
    for item in calculated.items:
        qty = item.qty
        if item.key.startswith('hotel_') and quote.people_count > 0:
            # halves round up
            qty = math.floor(item.qty / quote.people_count + 0.5)
        rows.append(ReportRow(
            title=item.title,
            details=strip_tier_prefix(item.pricing_notes),
            qty=qty,
        ))
    return rows


def report_file_name(quote: QuoteInput, locale: str = "en") -> str:
    loc = normalize_locale(locale)
    base = f"Angebot_{quote.quote_number}" if loc == 'de' else f"Quote_{quote.quote_number}"
    return f"{base}_{safe_file_segment(quote.client_name)}_{loc.upper()}.pdf"


def build_report(quote: QuoteInput, calculated: CalculatedQuote, locale: str = "en") -> QuoteReport:
    """Assemble the localized report for a quote and its calculation."""
    loc = normalize_locale(locale)
    if quote.people_count > 0:
        per_traveller = calculated.total / quote.people_count
    else:
        per_traveller = calculated.total

    return QuoteReport(
        locale=loc,
        quote=quote,
        rows=build_report_rows(quote, calculated),
        subtotal_per_traveller=per_traveller,
        total=calculated.total,
        file_name=report_file_name(quote, loc),
        labels=REPORT_LABELS[loc],
        hotel_label=label(f"hotel_{quote.hotel_tier}", loc),
        formatted_date=format_date(quote.date, loc),
        formatted_subtotal_per_traveller=format_currency(per_traveller, loc),
        formatted_total=format_currency(calculated.total, loc),
    )


_env: Optional[Environment] = None


def _get_env() -> Environment:
    global _env
    if _env is None:
        _env = Environment(
            loader=PackageLoader('trip_quote', 'templates'),
            autoescape=select_autoescape(['html']),
        )
    return _env


def render_report_html(report: QuoteReport) -> str:
    """Render the printable HTML for a report."""
    template = _get_env().get_template('quote_report.html')
    return template.render(report=report, quote=report.quote, t=report.labels)
