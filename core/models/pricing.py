# =============================================================================
# core/models/pricing.py - Pricing Plan Schemas
# =============================================================================
# Subscription plans shown on the public pricing page and edited from the
# admin console. Stored as one JSON value under the `pricingPlans` key of
# the settings table:
#
#   {"monthly": [PricingPlan, ...], "annual": [PricingPlan, ...]}
#
# Field aliases match the stored camelCase keys (contactUrl, usersIncluded).
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

logger = logging.getLogger(__name__)

DEFAULT_CURRENCY = "IDR"


class PricingPlan(BaseModel):
    """
    One subscription plan.

    `price` is in whole units of `currency` (no minor units). A plan with
    `contact=True` is sold through a contact link instead of checkout and
    must carry a `contactUrl`.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    price: int = Field(default=0, ge=0)
    currency: str = DEFAULT_CURRENCY
    description: str | None = None
    features: list[str] = Field(default_factory=list)
    popular: bool = False
    contact: bool = False
    contact_url: str | None = Field(default=None, alias="contactUrl")
    users_included: int | None = Field(default=None, ge=0, alias="usersIncluded")

    @field_validator("id", "name")
    @classmethod
    def _strip(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("currency")
    @classmethod
    def _upper_currency(cls, value: str) -> str:
        return value.strip().upper() or DEFAULT_CURRENCY

    @model_validator(mode="after")
    def _contact_needs_url(self) -> "PricingPlan":
        if self.contact and not (self.contact_url and self.contact_url.strip()):
            raise ValueError("contactUrl is required when contact is enabled")
        return self


class PricingPlans(BaseModel):
    """Monthly and annual plan lists."""
    monthly: list[PricingPlan] = Field(default_factory=list)
    annual: list[PricingPlan] = Field(default_factory=list)

    @classmethod
    def from_stored(cls, value: Any) -> "PricingPlans":
        """
        Parse the stored `pricingPlans` value leniently.

        A period that is missing or not a list gets the default plans for
        that period; individual plans that fail validation are skipped.
        """
        defaults = default_pricing_plans()
        stored = value if isinstance(value, dict) else {}

        plans = {}
        for period in ("monthly", "annual"):
            raw = stored.get(period)
            if not isinstance(raw, list):
                plans[period] = getattr(defaults, period)
                continue

            parsed = []
            for entry in raw:
                try:
                    parsed.append(PricingPlan.model_validate(entry))
                except ValidationError as e:
                    logger.warning(f"Skipping invalid {period} pricing plan: {e.error_count()} errors")
            plans[period] = parsed

        return cls(**plans)


_CORE_FEATURES = [
    "1 user account",
    "~ 2,000 basic messages",
    "~ 200 thinker messages",
    "Advanced multi-expert system",
    "Fine-tuned for business",
    "Basic customer support",
]

_GROWTH_FEATURES = [
    "More usage*",
    "5 user accounts",
    "~ 4,000 basic messages",
    "~ 400 thinker messages",
    "Priority customer support",
]

_ENTERPRISE_FEATURES = [
    "More usage*",
    "Unlimited user accounts",
    "Unlimited messages",
    "Customized multi-expert system",
    "Customized fine-tuning support",
    "Direct customer support",
]

CONTACT_URL = "https://www.ai4.ceo/contact"


def default_pricing_plans() -> PricingPlans:
    """Plans written by scripts/seed_plans.py and shown when none are stored."""
    return PricingPlans(
        monthly=[
            PricingPlan(
                id="core_monthly",
                name="Core",
                price=299000,
                description="Best for individual users who want essential capabilities.",
                features=_CORE_FEATURES,
                users_included=1,
            ),
            PricingPlan(
                id="growth_monthly",
                name="Growth",
                price=1999000,
                description="Tailored for expanding businesses, this tier offers "
                            "advanced tools and analytics.",
                features=_GROWTH_FEATURES,
                popular=True,
                users_included=5,
            ),
            PricingPlan(
                id="enterprise_monthly",
                name="Enterprise",
                description="Designed for established businesses, providing "
                            "comprehensive tools.",
                features=_ENTERPRISE_FEATURES,
                contact=True,
                contact_url=CONTACT_URL,
            ),
        ],
        annual=[
            # 20% off the monthly price * 12
            PricingPlan(
                id="core_annual",
                name="Core (Annual)",
                price=2870400,
                description="Save with annual billing",
                features=_CORE_FEATURES,
                users_included=1,
            ),
            PricingPlan(
                id="growth_annual",
                name="Growth (Annual)",
                price=19190400,
                description="Best value for growing teams",
                features=_GROWTH_FEATURES,
                popular=True,
                users_included=5,
            ),
            PricingPlan(
                id="enterprise_annual",
                name="Enterprise (Annual)",
                description="Customized enterprise solutions and support",
                features=_ENTERPRISE_FEATURES,
                contact=True,
                contact_url=CONTACT_URL,
            ),
        ],
    )
