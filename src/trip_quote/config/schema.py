"""
Schema checks for pricing configuration and quote documents.

Runs at the config-store and API boundary. Produces a typed defect report
instead of a yes/no answer, so the caller can show what is wrong and where.
Ladder quality (gaps, overlaps, coverage) is not checked here; see
trip_quote.validation.tiers.
"""
from dataclasses import dataclass, field
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..engine.models import PricingConfig, QuoteInput


class _Document(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra='ignore')


class TierSchema(_Document):
    min_people: int = Field(alias='minPeople', ge=1)
    max_people: Optional[int] = Field(alias='maxPeople')
    price: float = Field(ge=0)


class PricedItemSchema(_Document):
    pricing_model: Literal['per_person', 'per_group'] = Field(alias='pricingModel')
    multiplier: Literal['per_day', 'per_trip', 'per_piece']
    tiers: list[TierSchema] = Field(min_length=1)


class HotelSchema(_Document):
    budget: PricedItemSchema
    premium: PricedItemSchema
    luxury: PricedItemSchema


class ExtraServiceSchema(_Document):
    id: str
    title_en: str = Field(alias='titleEn')
    title_de: str = Field(alias='titleDe')
    price: float = Field(ge=0)
    pricing_model: Literal['per_person', 'per_group'] = Field(alias='pricingModel')
    multiplier: Literal['per_day', 'per_trip', 'per_piece']


class PricingConfigSchema(_Document):
    hotel: HotelSchema
    dinner: PricedItemSchema
    guide: PricedItemSchema
    flight: PricedItemSchema
    coverage_max_people: int = Field(alias='coverageMaxPeople', ge=1)
    extras: list[ExtraServiceSchema]


class SelectedExtraSchema(_Document):
    id: str
    days: int = Field(default=0, ge=0)
    quantity: int = Field(default=1, ge=0)


class QuoteInputSchema(_Document):
    client_name: str = Field(default='', alias='clientName')
    quote_number: str = Field(default='', alias='quoteNumber')
    date: str = ''
    # >= 1 is enforced by the calculator so it can report INVALID_INPUT
    people_count: int = Field(alias='peopleCount')
    days: int
    hotel_tier: Literal['budget', 'premium', 'luxury'] = Field(alias='hotelTier')
    dinner_included: bool = Field(default=False, alias='dinnerIncluded')
    guide_included: bool = Field(default=False, alias='guideIncluded')
    international_flight: bool = Field(default=False, alias='internationalFlight')
    guide_days: Optional[int] = Field(default=None, alias='guideDays')
    local_agency_commission_pct: float = Field(default=0, alias='localAgencyCommissionPct')
    jinn_commission_pct: float = Field(default=0, alias='jinnCommissionPct')
    selected_extras: list[SelectedExtraSchema] = Field(default_factory=list, alias='selectedExtras')


@dataclass
class ConfigDefect:
    """One schema violation, located by a dotted path (e.g. 'hotel.budget.tiers.0.price')."""
    path: str
    message: str

    def to_dict(self) -> dict:
        return {'path': self.path, 'message': self.message}


@dataclass
class SchemaReport:
    """Result of a schema check. `value` holds the parsed model when ok."""
    ok: bool
    defects: list[ConfigDefect] = field(default_factory=list)
    value: Any = None

    def to_dict(self) -> dict:
        return {'ok': self.ok, 'defects': [d.to_dict() for d in self.defects]}


class ConfigSchemaError(ValueError):
    """Raised when a document fails its schema check."""

    def __init__(self, report: SchemaReport):
        self.report = report
        summary = "; ".join(f"{d.path}: {d.message}" for d in report.defects[:5])
        super().__init__(f"Invalid pricing configuration: {summary}")


def _defects_from(error: ValidationError) -> list[ConfigDefect]:
    defects = []
    for err in error.errors():
        path = ".".join(str(part) for part in err['loc']) or '<root>'
        defects.append(ConfigDefect(path=path, message=err['msg']))
    return defects


def check_pricing_config(payload: Any) -> SchemaReport:
    """Check a pricing configuration document; value is a PricingConfig when ok."""
    try:
        parsed = PricingConfigSchema.model_validate(payload)
    except ValidationError as e:
        return SchemaReport(ok=False, defects=_defects_from(e))
    return SchemaReport(ok=True, value=PricingConfig.from_dict(parsed.model_dump(by_alias=True)))


def check_quote_input(payload: Any) -> SchemaReport:
    """Check a quote input document; value is a QuoteInput when ok."""
    try:
        parsed = QuoteInputSchema.model_validate(payload)
    except ValidationError as e:
        return SchemaReport(ok=False, defects=_defects_from(e))
    return SchemaReport(ok=True, value=QuoteInput.from_dict(parsed.model_dump(by_alias=True)))
