"""
Pricing API - FastAPI router for the pricing configuration.
"""
import json
import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException

from ..config.schema import ConfigSchemaError, check_pricing_config
from ..services.pricing_store import PricingConfigStore
from ..validation.tiers import validate_pricing_tiers
from .state import get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/pricing", tags=["pricing"])


@router.get("")
async def get_pricing(store: PricingConfigStore = Depends(get_store)):
    """Get the stored pricing configuration (or the default)."""
    try:
        return store.load().to_dict()
    except (OSError, json.JSONDecodeError) as e:
        logger.error("Failed to load pricing configuration: %s", e)
        raise HTTPException(status_code=500, detail="Failed to load pricing configuration")


@router.put("")
async def save_pricing(payload: Any = Body(...), store: PricingConfigStore = Depends(get_store)):
    """Schema-check and save a pricing configuration. Tier defects do not block saving."""
    try:
        saved = store.save_payload(payload)
    except ConfigSchemaError as e:
        raise HTTPException(
            status_code=400,
            detail={"error": "Invalid pricing configuration payload", **e.report.to_dict()},
        )
    except OSError as e:
        logger.error("Failed to save pricing configuration: %s", e)
        raise HTTPException(status_code=500, detail="Failed to save pricing configuration")
    return saved.to_dict()


@router.post("/check")
async def check_pricing(payload: Any = Body(...), lang: str = "en"):
    """Schema-check a pricing configuration without saving it."""
    report = check_pricing_config(payload)
    data = report.to_dict()
    if report.ok:
        data["tierDefects"] = validate_pricing_tiers(report.value, lang)
    return data


@router.get("/defects")
async def get_tier_defects(lang: str = "en", store: PricingConfigStore = Depends(get_store)):
    """Advisory tier ladder defects of the stored configuration, per section."""
    pricing = store.load()
    return {
        "coverageMaxPeople": pricing.coverage_max_people,
        "defects": validate_pricing_tiers(pricing, lang),
    }
