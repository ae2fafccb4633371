from typing import Any, Optional

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from pydantic import BaseModel

from .. import __version__
from ..engine import QuoteCalculationError
from ..services.export import quote_to_csv
from ..services.pricing_store import PricingConfigStore
from .calc import calculate_from_payload
from .pricing_api import router as pricing_router
from .quotes_api import router as quotes_router
from .state import get_store

app = FastAPI(
    title="Trip Quote API",
    description="Pricing configuration, quote calculation and numbering",
    version=__version__,
)

# Enable CORS for frontend development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(pricing_router)
app.include_router(quotes_router)


class CalcRequest(BaseModel):
    quote: dict[str, Any]
    pricing: Optional[dict[str, Any]] = None


@app.get("/")
async def root():
    return {"status": "online", "message": "Trip Quote API Active"}


@app.post("/calculate")
async def calculate(req: CalcRequest, lang: str = "en", store: PricingConfigStore = Depends(get_store)):
    try:
        _, calculated = calculate_from_payload(req.quote, req.pricing, lang, store)
    except QuoteCalculationError as e:
        raise HTTPException(status_code=422, detail=e.to_dict())
    return calculated.to_dict()


@app.post("/calculate/export.csv")
async def export_quote(req: CalcRequest, lang: str = "en", store: PricingConfigStore = Depends(get_store)):
    try:
        quote, calculated = calculate_from_payload(req.quote, req.pricing, lang, store)
    except QuoteCalculationError as e:
        raise HTTPException(status_code=422, detail=e.to_dict())
    filename = f"quote_{quote.quote_number or 'draft'}.csv"
    return Response(
        content=quote_to_csv(calculated),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
