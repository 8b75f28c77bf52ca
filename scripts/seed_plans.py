#!/usr/bin/env python3
# =============================================================================
# scripts/seed_plans.py - Seed Default Pricing Plans
# =============================================================================
# Writes the default Core / Growth / Enterprise plans (monthly and annual)
# to the `pricingPlans` key of the settings table, replacing whatever is
# stored there.
#
# Usage:
#   python scripts/seed_plans.py
#
# Prerequisites:
#   - SUPABASE_URL and SUPABASE_SERVICE_KEY set (.env file)
# =============================================================================

import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv

# Settings are read when app.config is imported
load_dotenv()

from app.exceptions import SettingsUpdateError
from core.models.pricing import default_pricing_plans
from core.services.settings_service import SettingsService


def main() -> int:
    """Seed the default pricing plans."""
    plans = default_pricing_plans()

    try:
        stored = SettingsService.update_pricing_plans(plans)
    except SettingsUpdateError as e:
        print(f"Error: {e.message}")
        if e.suggestion:
            print(f"Suggestion: {e.suggestion}")
        return 1

    print(
        f"Seeded default pricing plans: {len(stored.monthly)} monthly, "
        f"{len(stored.annual)} annual"
    )
    for plan in stored.monthly + stored.annual:
        price = "contact sales" if plan.contact else f"{plan.price:,} {plan.currency}"
        print(f"   - {plan.id}: {plan.name} ({price})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
