# =============================================================================
# app/routers/admin.py - Admin Console Endpoints
# =============================================================================
# Provider management for the admin console:
# - Provider health (live probes) and environment validation
# - Azure deployment listing for the override picker
# - Reading and updating the provider preference and model overrides
# - Reading and replacing the subscription pricing plans
#
# Every endpoint requires an admin user.
# =============================================================================

import logging

from fastapi import APIRouter, Depends
from starlette.concurrency import run_in_threadpool

from app.auth import require_admin, AuthUser
from app.dependencies import HealthServiceDep, ProviderEnvDep
from core.models.health import AzureModelsResponse, ProvidersHealthReport
from core.models.pricing import PricingPlans
from core.models.provider import (
    ProviderSettings,
    ProviderSettingsUpdate,
    ValidationSummary,
)
from core.providers.env_validation import get_validation_summary
from core.services.settings_service import SettingsService

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_admin)])


# =============================================================================
# Providers
# =============================================================================

@router.get("/providers/health", response_model=ProvidersHealthReport)
async def get_provider_health(env: ProviderEnvDep, health_service: HealthServiceDep):
    """
    Check configuration and reachability of every AI provider.

    Overall status is `operational` when any provider answers,
    `degraded` when providers are configured but none answer,
    and `offline` when nothing is configured.
    """
    return await health_service.check_all(env)


@router.get("/providers/validation", response_model=ValidationSummary)
async def get_provider_validation(env: ProviderEnvDep):
    """Environment validation details (errors and warnings) per provider."""
    return get_validation_summary(env)


@router.get("/models/azure", response_model=AzureModelsResponse)
async def list_azure_models(env: ProviderEnvDep, health_service: HealthServiceDep):
    """
    List deployments on the Azure OpenAI resource.

    Always returns 200; falls back to a default model list with a warning
    when Azure cannot be queried.
    """
    return await health_service.list_azure_deployments(env)


# =============================================================================
# Provider Settings
# =============================================================================

@router.get("/settings/providers", response_model=ProviderSettings)
async def get_provider_settings():
    """Current provider preference and per-provider model overrides."""
    return await run_in_threadpool(SettingsService.get_provider_settings)


@router.put("/settings/providers", response_model=ProviderSettings)
async def update_provider_settings(
    update: ProviderSettingsUpdate,
    user: AuthUser = Depends(require_admin),
):
    """
    Update the provider preference and/or model overrides.

    Only the fields present in the body are written. An override map
    replaces the stored map for that provider; send `null` to clear it.
    Takes effect on the next chat request.
    """
    logger.info(
        f"Admin {user.id} updating provider settings: "
        f"{', '.join(update.model_dump(exclude_unset=True)) or 'no changes'}"
    )
    return await run_in_threadpool(SettingsService.update_provider_settings, update)


# =============================================================================
# Pricing Plans
# =============================================================================

@router.get("/settings/pricing-plans", response_model=PricingPlans)
async def get_pricing_plans():
    """Stored monthly and annual pricing plans (defaults where none are stored)."""
    return await run_in_threadpool(SettingsService.get_pricing_plans)


@router.put("/settings/pricing-plans", response_model=PricingPlans)
async def update_pricing_plans(
    plans: PricingPlans,
    user: AuthUser = Depends(require_admin),
):
    """
    Replace the pricing plans.

    Both lists are written as sent. A plan with `contact: true` must carry
    a `contactUrl`.
    """
    logger.info(
        f"Admin {user.id} updating pricing plans: "
        f"{len(plans.monthly)} monthly, {len(plans.annual)} annual"
    )
    return await run_in_threadpool(SettingsService.update_pricing_plans, plans)
