"""
Calculation errors.

Both abort the whole calculation; callers get no partial quote.
"""


class QuoteCalculationError(ValueError):
    """Base error for a quote that cannot be calculated."""
    code = "CALCULATION_ERROR"

    def to_dict(self) -> dict:
        return {"code": self.code, "message": str(self)}


class InvalidQuoteInputError(QuoteCalculationError):
    """People count or days below 1."""
    code = "INVALID_INPUT"

    def __init__(self, people_count: int, days: int):
        self.people_count = people_count
        self.days = days
        super().__init__(
            f"People count and days must be >= 1 (got people={people_count}, days={days})"
        )

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update({"peopleCount": self.people_count, "days": self.days})
        return data


class NoTierMatchError(QuoteCalculationError):
    """No tier of a required component covers the traveller count."""
    code = "NO_TIER_MATCH"

    def __init__(self, component: str, people_count: int):
        self.component = component
        self.people_count = people_count
        super().__init__(f"No pricing tier for {component} and {people_count} people")

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update({"component": self.component, "peopleCount": self.people_count})
        return data
