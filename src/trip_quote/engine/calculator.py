"""
Pricing Calculator - turns a pricing configuration and a quote into priced lines.

Resolution order per quote:
1. Reject people_count < 1 or days < 1 before any tier lookup
2. Accommodation (always), priced per night = days - 1
3. Dinner, guide, flight when included
4. Selected extras in their given order (unknown ids are skipped)
5. Base total, then commissions on top

The calculator keeps no state between calls; the same inputs always give
the same CalculatedQuote.
"""
import logging
from typing import Optional

from . import labels
from .commissions import apply_commissions
from .errors import InvalidQuoteInputError
from .models import (
    CalculatedQuote,
    ExtraService,
    LineItem,
    PricedItemConfig,
    PricingConfig,
    QuoteInput,
    SelectedExtra,
)
from .money import round2
from .tier_resolver import require_tier

logger = logging.getLogger(__name__)


def _people_factor(pricing_model: str, people_count: int) -> int:
    return people_count if pricing_model == "per_person" else 1


class PricingCalculator:
    """
    Core quote calculator for one label locale.

    The locale only changes titles and pricing notes, never amounts.
    """

    def __init__(self, locale: str = "en"):
        self.locale = labels.normalize_locale(locale)

    def calculate(self, quote: QuoteInput, pricing: PricingConfig) -> CalculatedQuote:
        """
        Calculate a quote.

        Raises:
            InvalidQuoteInputError: people_count or days below 1
            NoTierMatchError: an included component has no tier for people_count
        """
        if quote.people_count < 1 or quote.days < 1:
            raise InvalidQuoteInputError(quote.people_count, quote.days)

        items: list[LineItem] = []

        hotel_key = f"hotel_{quote.hotel_tier}"
        nights = max(0, quote.days - 1)
        items.append(self._calculate_component(
            key=hotel_key,
            quote=quote,
            config=pricing.hotel[quote.hotel_tier],
            days_override=nights,
            unit_label=labels.label("per_night", self.locale),
        ))

        if quote.dinner_included:
            items.append(self._calculate_component("dinner", quote, pricing.dinner))

        if quote.guide_included:
            guide_days = None
            if pricing.guide.multiplier == "per_day":
                guide_days = min(quote.days, max(1, quote.guide_days or quote.days))
            items.append(self._calculate_component(
                "guide", quote, pricing.guide, days_override=guide_days
            ))

        if quote.international_flight:
            items.append(self._calculate_component("flight", quote, pricing.flight))

        for selected in quote.selected_extras:
            extra = pricing.find_extra(selected.id)
            if extra is None:
                continue
            items.append(self._calculate_extra(extra, selected, quote))

        base_total = round2(sum(item.subtotal for item in items))
        commission_items, commission_total, total = apply_commissions(
            base_total,
            quote.local_agency_commission_pct,
            quote.jinn_commission_pct,
            self.locale,
        )

        logger.debug(
            "Calculated quote %s: %d items, base %.2f, commissions %.2f, total %.2f",
            quote.quote_number, len(items), base_total, commission_total, total,
        )
        return CalculatedQuote(
            items=items,
            base_total=base_total,
            commission_items=commission_items,
            commission_total=commission_total,
            total=total,
        )

    def _calculate_component(
        self,
        key: str,
        quote: QuoteInput,
        config: PricedItemConfig,
        days_override: Optional[int] = None,
        unit_label: Optional[str] = None,
    ) -> LineItem:
        """Price one tiered component. unit_label replaces the whole note (accommodation)."""
        tier = require_tier(key, config.tiers, quote.people_count)

        day_count = quote.days if days_override is None else days_override
        time_factor = day_count if config.multiplier == "per_day" else 1
        qty = _people_factor(config.pricing_model, quote.people_count) * time_factor
        unit_price = round2(tier.price)
        subtotal = round2(qty * unit_price)

        if unit_label:
            notes = unit_label
        else:
            notes = ", ".join([
                tier.label(self.locale),
                labels.label(config.pricing_model, self.locale),
                labels.label(config.multiplier, self.locale),
            ])

        logger.debug("%s: %s x %.2f = %.2f", key, qty, unit_price, subtotal)
        return LineItem(
            key=key,
            title=labels.label(key, self.locale),
            qty=qty,
            unit_price=unit_price,
            subtotal=subtotal,
            pricing_notes=notes,
            title_key=f"items.{key}",
        )

    def _calculate_extra(self, extra: ExtraService, selected: SelectedExtra, quote: QuoteInput) -> LineItem:
        if extra.multiplier == "per_day":
            time_factor = max(1, selected.days or quote.days)
        elif extra.multiplier == "per_piece":
            time_factor = max(1, selected.quantity or 1)
        else:
            time_factor = 1
        qty = _people_factor(extra.pricing_model, quote.people_count) * time_factor
        subtotal = round2(extra.price * qty)

        return LineItem(
            key=f"extra_{extra.id}",
            title=extra.title(self.locale),
            qty=qty,
            unit_price=round2(extra.price),
            subtotal=subtotal,
            pricing_notes=", ".join([
                labels.label(extra.pricing_model, self.locale),
                labels.label(extra.multiplier, self.locale),
            ]),
        )


def calculate_quote(quote: QuoteInput, pricing: PricingConfig, locale: str = "en") -> CalculatedQuote:
    """Calculate a quote with a one-off calculator."""
    return PricingCalculator(locale).calculate(quote, pricing)
