"""
Data models for the quote engine.

Uses dataclasses for structured, type-safe data representation.
JSON documents exchanged with the rest of the application use camelCase
keys; `from_dict` / `to_dict` translate at the edge.
"""
from dataclasses import dataclass, field, replace
from typing import Literal, Optional

from . import labels

PricingModel = Literal["per_person", "per_group"]
Multiplier = Literal["per_day", "per_trip", "per_piece"]
HotelTier = Literal["budget", "premium", "luxury"]

PRICING_MODELS = ("per_person", "per_group")
MULTIPLIERS = ("per_day", "per_trip", "per_piece")
HOTEL_TIERS = ("budget", "premium", "luxury")

# Editable priced sections, in display order
SECTION_TARGETS = (
    "hotel.budget",
    "hotel.premium",
    "hotel.luxury",
    "dinner",
    "guide",
    "flight",
)


@dataclass
class Tier:
    """A price bound to a traveller-count range. max_people=None is open-ended."""
    min_people: int
    max_people: Optional[int]
    price: float

    def contains(self, people_count: int) -> bool:
        if people_count < self.min_people:
            return False
        return self.max_people is None or people_count <= self.max_people

    def label(self, locale: str = "en") -> str:
        return labels.tier_label(self.min_people, self.max_people, locale)

    @classmethod
    def from_dict(cls, data: dict) -> 'Tier':
        max_people = data.get('maxPeople')
        return cls(
            min_people=int(data['minPeople']),
            max_people=int(max_people) if max_people is not None else None,
            price=float(data['price']),
        )

    def to_dict(self) -> dict:
        return {
            'minPeople': self.min_people,
            'maxPeople': self.max_people,
            'price': self.price,
        }


@dataclass
class PricedItemConfig:
    """One priceable component (a hotel grade, dinner, guide, flight)."""
    pricing_model: PricingModel
    multiplier: Multiplier
    tiers: list[Tier] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> 'PricedItemConfig':
        return cls(
            pricing_model=data['pricingModel'],
            multiplier=data['multiplier'],
            tiers=[Tier.from_dict(t) for t in data.get('tiers', [])],
        )

    def to_dict(self) -> dict:
        return {
            'pricingModel': self.pricing_model,
            'multiplier': self.multiplier,
            'tiers': [t.to_dict() for t in self.tiers],
        }


@dataclass
class ExtraService:
    """An optional service with a flat price."""
    id: str
    title_en: str
    title_de: str
    price: float
    pricing_model: PricingModel
    multiplier: Multiplier

    def title(self, locale: str = "en") -> str:
        return self.title_de if labels.normalize_locale(locale) == 'de' else self.title_en

    @classmethod
    def from_dict(cls, data: dict) -> 'ExtraService':
        return cls(
            id=str(data['id']),
            title_en=data.get('titleEn', ''),
            title_de=data.get('titleDe', ''),
            price=float(data.get('price', 0)),
            pricing_model=data['pricingModel'],
            multiplier=data['multiplier'],
        )

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'titleEn': self.title_en,
            'titleDe': self.title_de,
            'price': self.price,
            'pricingModel': self.pricing_model,
            'multiplier': self.multiplier,
        }


@dataclass
class PricingConfig:
    """Full pricing configuration: three hotel grades, dinner, guide, flight, extras."""
    hotel: dict[str, PricedItemConfig]
    dinner: PricedItemConfig
    guide: PricedItemConfig
    flight: PricedItemConfig
    coverage_max_people: int
    extras: list[ExtraService] = field(default_factory=list)

    def find_extra(self, extra_id: str) -> Optional[ExtraService]:
        """First extra with this id; duplicates after it are never reached."""
        for extra in self.extras:
            if extra.id == extra_id:
                return extra
        return None

    def section(self, target: str) -> PricedItemConfig:
        """Get a priced section by editor target, e.g. 'hotel.budget' or 'guide'."""
        if target not in SECTION_TARGETS:
            raise KeyError(f"Unknown pricing section '{target}'")
        if target.startswith('hotel.'):
            return self.hotel[target.split('.', 1)[1]]
        return getattr(self, target)

    def with_section(self, target: str, config: PricedItemConfig) -> 'PricingConfig':
        """Return a copy with one priced section replaced."""
        if target not in SECTION_TARGETS:
            raise KeyError(f"Unknown pricing section '{target}'")
        if target.startswith('hotel.'):
            hotel = dict(self.hotel)
            hotel[target.split('.', 1)[1]] = config
            return replace(self, hotel=hotel)
        return replace(self, **{target: config})

    @classmethod
    def from_dict(cls, data: dict) -> 'PricingConfig':
        return cls(
            hotel={k: PricedItemConfig.from_dict(v) for k, v in data['hotel'].items()},
            dinner=PricedItemConfig.from_dict(data['dinner']),
            guide=PricedItemConfig.from_dict(data['guide']),
            flight=PricedItemConfig.from_dict(data['flight']),
            coverage_max_people=int(data['coverageMaxPeople']),
            extras=[ExtraService.from_dict(e) for e in data.get('extras', [])],
        )

    def to_dict(self) -> dict:
        return {
            'hotel': {k: v.to_dict() for k, v in self.hotel.items()},
            'dinner': self.dinner.to_dict(),
            'guide': self.guide.to_dict(),
            'flight': self.flight.to_dict(),
            'coverageMaxPeople': self.coverage_max_people,
            'extras': [e.to_dict() for e in self.extras],
        }


@dataclass
class SelectedExtra:
    """An extra picked for a quote. days/quantity of 0 mean 'use the default'."""
    id: str
    days: int = 0
    quantity: int = 1

    @classmethod
    def from_dict(cls, data: dict) -> 'SelectedExtra':
        return cls(
            id=str(data['id']),
            days=int(data.get('days') or 0),
            quantity=int(data.get('quantity', 1) or 0),
        )

    def to_dict(self) -> dict:
        return {'id': self.id, 'days': self.days, 'quantity': self.quantity}


@dataclass
class QuoteInput:
    """Parameters of a single trip quote."""
    client_name: str
    quote_number: str
    date: str  # ISO date string
    people_count: int
    days: int
    hotel_tier: HotelTier
    dinner_included: bool = False
    guide_included: bool = False
    international_flight: bool = False
    guide_days: Optional[int] = None
    local_agency_commission_pct: float = 0.0
    jinn_commission_pct: float = 0.0
    selected_extras: list[SelectedExtra] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> 'QuoteInput':
        guide_days = data.get('guideDays')
        return cls(
            client_name=data.get('clientName', ''),
            quote_number=data.get('quoteNumber', ''),
            date=data.get('date', ''),
            people_count=int(data['peopleCount']),
            days=int(data['days']),
            hotel_tier=data['hotelTier'],
            dinner_included=bool(data.get('dinnerIncluded', False)),
            guide_included=bool(data.get('guideIncluded', False)),
            international_flight=bool(data.get('internationalFlight', False)),
            guide_days=int(guide_days) if guide_days is not None else None,
            local_agency_commission_pct=float(data.get('localAgencyCommissionPct') or 0),
            jinn_commission_pct=float(data.get('jinnCommissionPct') or 0),
            selected_extras=[SelectedExtra.from_dict(s) for s in data.get('selectedExtras', [])],
        )

    def to_dict(self) -> dict:
        return {
            'clientName': self.client_name,
            'quoteNumber': self.quote_number,
            'date': self.date,
            'peopleCount': self.people_count,
            'days': self.days,
            'hotelTier': self.hotel_tier,
            'dinnerIncluded': self.dinner_included,
            'guideIncluded': self.guide_included,
            'internationalFlight': self.international_flight,
            'guideDays': self.guide_days,
            'localAgencyCommissionPct': self.local_agency_commission_pct,
            'jinnCommissionPct': self.jinn_commission_pct,
            'selectedExtras': [s.to_dict() for s in self.selected_extras],
        }


@dataclass
class LineItem:
    """A single priced line of a quote."""
    key: str
    title: str
    qty: int
    unit_price: float
    subtotal: float
    pricing_notes: str
    title_key: Optional[str] = None

    def to_dict(self) -> dict:
        data = {
            'key': self.key,
            'title': self.title,
            'qty': self.qty,
            'unitPrice': self.unit_price,
            'subtotal': self.subtotal,
            'pricingNotes': self.pricing_notes,
        }
        if self.title_key:
            data['titleKey'] = self.title_key
        return data


@dataclass
class CommissionItem:
    """A percentage commission on the base total."""
    key: str
    title: str
    rate_pct: float
    amount: float

    def to_dict(self) -> dict:
        return {
            'key': self.key,
            'title': self.title,
            'ratePct': self.rate_pct,
            'amount': self.amount,
        }


@dataclass
class CalculatedQuote:
    """Complete result of a quote calculation."""
    items: list[LineItem]
    base_total: float
    commission_items: list[CommissionItem]
    commission_total: float
    total: float

    def to_dict(self) -> dict:
        return {
            'items': [i.to_dict() for i in self.items],
            'baseTotal': self.base_total,
            'commissionItems': [c.to_dict() for c in self.commission_items],
            'commissionTotal': self.commission_total,
            'total': self.total,
        }
