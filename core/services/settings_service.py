# =============================================================================
# core/services/settings_service.py - Settings Business Logic
# =============================================================================
# Reads and writes values kept in the settings store:
# - Provider preference and per-role model overrides (model resolution)
# - Pricing plans (public pricing page, admin console)
#
# load_provider_settings() never raises: a failed or unparseable read
# returns None so the resolver can take its static default path.
# =============================================================================

import logging

from pydantic import ValidationError

from app.exceptions import SettingsUpdateError
from core.models.pricing import PricingPlans, default_pricing_plans
from core.models.provider import ProviderSettings, ProviderSettingsUpdate
from lib.supabase_client import SupabaseClient, SupabaseClientError

logger = logging.getLogger(__name__)

# Stored keys, in the same order as ProviderSettings fields
PROVIDER_SETTING_KEYS = (
    "defaultProviderPreference",
    "modelOverridesGroq",
    "modelOverridesVertex",
    "modelOverridesAzure",
)

PRICING_PLANS_KEY = "pricingPlans"


class SettingsService:
    """
    Service for values in the settings store.

    Provides a clean interface between the resolver, admin routes and the
    settings table.
    """

    # -------------------------------------------------------------------------
    # Provider Settings
    # -------------------------------------------------------------------------

    @staticmethod
    def get_provider_settings() -> ProviderSettings:
        """
        Read provider settings.

        Missing keys fall back to defaults (groq, no overrides).

        Raises:
            SupabaseClientError: If the settings store cannot be read
        """
        values = SupabaseClient.fetch_settings(PROVIDER_SETTING_KEYS)
        return ProviderSettings.model_validate(values)

    @staticmethod
    def load_provider_settings() -> ProviderSettings | None:
        """
        Read provider settings for model resolution.

        Returns:
            ProviderSettings, or None when the settings store is unavailable
            or holds values that cannot be parsed
        """
        try:
            return SettingsService.get_provider_settings()
        except SupabaseClientError as e:
            logger.warning(f"Could not read provider settings: {e}")
            return None
        except ValidationError as e:
            logger.warning(f"Stored provider settings are invalid: {e.error_count()} errors")
            return None

    @staticmethod
    def update_provider_settings(update: ProviderSettingsUpdate) -> ProviderSettings:
        """
        Write the fields set on `update` and return the stored settings.

        Raises:
            SettingsUpdateError: If the write fails
        """
        changed = update.model_dump(mode="json", exclude_unset=True)
        if not changed:
            return SettingsService.get_provider_settings()

        # Field names -> stored camelCase keys
        aliases = {
            name: field.alias
            for name, field in ProviderSettings.model_fields.items()
        }
        values = {
            aliases[name]: value
            for name, value in changed.items()
        }

        try:
            SupabaseClient.upsert_settings(values)
        except SupabaseClientError as e:
            logger.error(f"Failed to update provider settings: {e}")
            raise SettingsUpdateError(str(e))

        return SettingsService.get_provider_settings()

    # -------------------------------------------------------------------------
    # Pricing Plans
    # -------------------------------------------------------------------------

    @staticmethod
    def get_pricing_plans() -> PricingPlans:
        """
        Read the stored pricing plans.

        Periods that were never stored get the default plans.

        Raises:
            SupabaseClientError: If the settings store cannot be read
        """
        values = SupabaseClient.fetch_settings([PRICING_PLANS_KEY])
        return PricingPlans.from_stored(values.get(PRICING_PLANS_KEY))

    @staticmethod
    def load_pricing_plans() -> PricingPlans:
        """Pricing plans for the public page; defaults when the store is down."""
        try:
            return SettingsService.get_pricing_plans()
        except SupabaseClientError as e:
            logger.warning(f"Could not read pricing plans, using defaults: {e}")
            return default_pricing_plans()

    @staticmethod
    def update_pricing_plans(plans: PricingPlans) -> PricingPlans:
        """
        Replace the stored pricing plans.

        Raises:
            SettingsUpdateError: If the write fails
        """
        value = plans.model_dump(mode="json", by_alias=True, exclude_none=True)

        try:
            SupabaseClient.upsert_settings({PRICING_PLANS_KEY: value})
        except SupabaseClientError as e:
            logger.error(f"Failed to update pricing plans: {e}")
            raise SettingsUpdateError(str(e), setting="pricing plans")

        logger.info(
            f"Pricing plans updated: {len(plans.monthly)} monthly, "
            f"{len(plans.annual)} annual"
        )
        return SettingsService.get_pricing_plans()
