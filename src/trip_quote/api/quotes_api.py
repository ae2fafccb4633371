"""
Quotes API - numbering and printable reports.
"""
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import BaseModel

from ..engine import QuoteCalculationError
from ..services.pricing_store import PricingConfigStore
from ..services.quote_numbers import next_quote_number
from ..services.report import build_report, render_report_html
from .calc import calculate_from_payload
from .state import get_store

router = APIRouter(prefix="/api/quotes", tags=["quotes"])


class NextNumberRequest(BaseModel):
    current: str


class ReportRequest(BaseModel):
    quote: dict[str, Any]
    pricing: Optional[dict[str, Any]] = None


@router.post("/next-number")
async def get_next_number(req: NextNumberRequest):
    """Quote number following `current`; unrecognised formats come back unchanged."""
    return {"quoteNumber": next_quote_number(req.current)}


@router.post("/report", response_class=HTMLResponse)
async def render_report(req: ReportRequest, lang: str = "en", store: PricingConfigStore = Depends(get_store)):
    """Render the printable HTML report for a quote."""
    try:
        quote, calculated = calculate_from_payload(req.quote, req.pricing, lang, store)
    except QuoteCalculationError as e:
        raise HTTPException(status_code=422, detail=e.to_dict())

    report = build_report(quote, calculated, lang)
    return HTMLResponse(
        render_report_html(report),
        headers={"X-Report-Filename": report.file_name},
    )
