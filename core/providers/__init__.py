# =============================================================================
# core/providers/ - AI Provider Selection
# =============================================================================
# - env_validation.py: Checks provider environment variables
# - catalog.py: Default vendor model id per (provider, role)
# - language_models.py: Callable model handles over the vendor SDKs
# - resolver.py: Picks a provider and model for a role, with fallback
# =============================================================================

from core.providers.catalog import MODEL_CATALOG, model_id_for
from core.providers.env_validation import (
    get_configured_providers,
    get_validation_summary,
    has_valid_provider,
    require_valid_provider,
    validate_all_providers,
    validate_azure_env,
    validate_groq_env,
    validate_vertex_env,
)
from core.providers.language_models import (
    GenerationResult,
    LanguageModel,
    ReasoningModel,
    create_language_model,
    extract_reasoning,
)
from core.providers.resolver import (
    Candidate,
    resolve_candidates,
    resolve_dynamic,
    resolve_for_role,
)

__all__ = [
    "MODEL_CATALOG",
    "model_id_for",
    "get_configured_providers",
    "get_validation_summary",
    "has_valid_provider",
    "require_valid_provider",
    "validate_all_providers",
    "validate_azure_env",
    "validate_groq_env",
    "validate_vertex_env",
    "GenerationResult",
    "LanguageModel",
    "ReasoningModel",
    "create_language_model",
    "extract_reasoning",
    "Candidate",
    "resolve_candidates",
    "resolve_dynamic",
    "resolve_for_role",
]
