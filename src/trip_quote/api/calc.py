"""
Shared request handling for endpoints that calculate a quote.
"""
import logging
from typing import Any, Optional

from fastapi import HTTPException

from ..config.schema import check_pricing_config, check_quote_input
from ..engine import CalculatedQuote, QuoteCalculationError, QuoteInput, calculate_quote
from ..services.pricing_store import PricingConfigStore

logger = logging.getLogger(__name__)


def calculate_from_payload(
    quote_payload: dict[str, Any],
    pricing_payload: Optional[dict[str, Any]],
    lang: str,
    store: PricingConfigStore,
) -> tuple[QuoteInput, CalculatedQuote]:
    """
    Schema-check the payloads and calculate.

    Uses the stored pricing configuration when none is posted.
    Malformed documents -> HTTP 400; calculation errors propagate.
    """
    quote_report = check_quote_input(quote_payload)
    if not quote_report.ok:
        raise HTTPException(
            status_code=400,
            detail={"error": "Invalid quote payload", **quote_report.to_dict()},
        )

    if pricing_payload is None:
        pricing = store.load()
    else:
        pricing_report = check_pricing_config(pricing_payload)
        if not pricing_report.ok:
            raise HTTPException(
                status_code=400,
                detail={"error": "Invalid pricing configuration payload", **pricing_report.to_dict()},
            )
        pricing = pricing_report.value

    quote = quote_report.value
    try:
        return quote, calculate_quote(quote, pricing, lang)
    except QuoteCalculationError as e:
        logger.warning("Quote %s cannot be calculated: %s", quote.quote_number, e)
        raise
