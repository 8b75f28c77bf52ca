# =============================================================================
# app/routers/pricing.py - Public Pricing Endpoint
# =============================================================================
# Serves the subscription plans shown on the pricing page. No auth.
# =============================================================================

from fastapi import APIRouter
from starlette.concurrency import run_in_threadpool

from core.models.pricing import PricingPlans
from core.services.settings_service import SettingsService

router = APIRouter()


@router.get("/plans", response_model=PricingPlans)
async def list_pricing_plans():
    """
    Monthly and annual pricing plans.

    Falls back to the default plans when the settings store is unavailable.
    """
    return await run_in_threadpool(SettingsService.load_pricing_plans)
