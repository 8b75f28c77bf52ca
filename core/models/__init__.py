# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - provider.py: Roles, providers, env snapshot, validation, stored settings
# - chat.py: Chat completion request/response schemas
# - health.py: Provider health and Azure deployment schemas
# - pricing.py: Subscription pricing plans
#
# These models define the "contract" between API and clients.
# =============================================================================

# -----------------------------------------------------------------------------
# Provider Models - Model resolution inputs and validation
# -----------------------------------------------------------------------------
from .provider import (
    DEFAULT_AZURE_API_VERSION,
    ModelOverrides,
    ModelRole,
    Provider,
    ProviderEnvironment,
    ProviderSettings,
    ProviderSettingsUpdate,
    ProviderValidation,
    ValidationResult,
    ValidationSummary,
    role_key,
)

# -----------------------------------------------------------------------------
# Chat Models - Conversational interface
# -----------------------------------------------------------------------------
from .chat import (
    ChatCompletionRequest,
    ChatCompletionResponse,
    ChatMessage,
    MessageRole,
)

# -----------------------------------------------------------------------------
# Pricing Models - Subscription plans
# -----------------------------------------------------------------------------
from .pricing import (
    PricingPlan,
    PricingPlans,
    default_pricing_plans,
)

# -----------------------------------------------------------------------------
# Health Models - Admin provider dashboard
# -----------------------------------------------------------------------------
from .health import (
    AzureModel,
    AzureModelsResponse,
    HealthSummary,
    OverallStatus,
    ProviderHealth,
    ProvidersHealthReport,
    ProviderStatus,
)

__all__ = [
    # Provider
    "DEFAULT_AZURE_API_VERSION",
    "ModelOverrides",
    "ModelRole",
    "Provider",
    "ProviderEnvironment",
    "ProviderSettings",
    "ProviderSettingsUpdate",
    "ProviderValidation",
    "ValidationResult",
    "ValidationSummary",
    "role_key",
    # Chat
    "ChatCompletionRequest",
    "ChatCompletionResponse",
    "ChatMessage",
    "MessageRole",
    # Pricing
    "PricingPlan",
    "PricingPlans",
    "default_pricing_plans",
    # Health
    "AzureModel",
    "AzureModelsResponse",
    "HealthSummary",
    "OverallStatus",
    "ProviderHealth",
    "ProvidersHealthReport",
    "ProviderStatus",
]
