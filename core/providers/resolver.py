# =============================================================================
# core/providers/resolver.py - Model Provider Resolution
# =============================================================================
# Maps a logical model role onto a concrete vendor model.
#
# Resolution order:
#   1. The preferred provider (from settings, default groq)
#   2. The remaining providers in the fixed order groq -> vertex -> azure
# The first provider whose environment validates wins.
#
# The model id is the trimmed per-role override if one is stored, else the
# catalog entry for the role, else the catalog entry for "chat-model".
# The reasoning role is wrapped so <think> blocks are split from the answer.
#
# Usage:
#   from core.providers.resolver import resolve_dynamic
#   candidate = resolve_dynamic(ModelRole.CHAT_MODEL, settings.provider_environment)
#   result = candidate.model.generate(messages)
# =============================================================================

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Mapping

from app.exceptions import ProviderConfigurationError
from core.models.provider import (
    ModelRole,
    Provider,
    ProviderEnvironment,
    ProviderSettings,
    role_key,
)
from core.providers.catalog import model_id_for
from core.providers.env_validation import validate_all_providers
from core.providers.language_models import (
    LanguageModel,
    ReasoningModel,
    create_language_model,
)

logger = logging.getLogger(__name__)

FALLBACK_ORDER: tuple[Provider, ...] = (Provider.GROQ, Provider.VERTEX, Provider.AZURE)


@dataclass(frozen=True)
class Candidate:
    """A resolved (provider, model id, callable model) triple."""
    provider: Provider
    model_id: str
    model: LanguageModel


def provider_order(preference: Provider) -> list[Provider]:
    """Preferred provider first, then the rest in fallback order."""
    return [preference] + [p for p in FALLBACK_ORDER if p != preference]


def build_candidate(
    provider: Provider,
    role: ModelRole | str,
    env: ProviderEnvironment,
    overrides: Mapping[str, str] | None = None,
) -> Candidate:
    """Build a candidate without checking the provider's configuration."""
    model_id = model_id_for(provider, role, overrides)
    model = create_language_model(provider, model_id, env)

    if role_key(role) == ModelRole.CHAT_MODEL_REASONING.value:
        model = ReasoningModel(model)

    return Candidate(provider=provider, model_id=model_id, model=model)


def resolve_candidates(
    role: ModelRole | str,
    env: ProviderEnvironment,
    preference: Provider = Provider.GROQ,
    groq_overrides: Mapping[str, str] | None = None,
    vertex_overrides: Mapping[str, str] | None = None,
    azure_overrides: Mapping[str, str] | None = None,
) -> list[Candidate]:
    """
    Resolve a role to the first configured provider's model.

    Args:
        role: Logical model role
        env: Provider environment snapshot
        preference: Provider to try first
        groq_overrides / vertex_overrides / azure_overrides: Role -> model id

    Returns:
        Single-element list with the chosen candidate

    Raises:
        ProviderConfigurationError: If no provider validates. The message
            lists each provider's errors on its own line.
    """
    validation = validate_all_providers(env)
    overrides = {
        Provider.GROQ: groq_overrides,
        Provider.VERTEX: vertex_overrides,
        Provider.AZURE: azure_overrides,
    }

    for provider in provider_order(preference):
        if not validation.for_provider(provider).is_valid:
            continue

        if provider != preference:
            logger.warning(
                f"Preferred provider {preference.value} is not configured, "
                f"falling back to {provider.value}"
            )

        candidate = build_candidate(provider, role, env, overrides[provider])
        logger.info(
            f"Resolved {role_key(role)} to {candidate.provider.value}:{candidate.model_id}"
        )
        return [candidate]

    errors = {
        r.provider.value: r.errors for r in validation.results() if not r.is_valid
    }
    issues = "\n".join(
        f"{r.provider.display_name}: {', '.join(r.errors)}"
        for r in validation.results()
        if not r.is_valid
    )
    raise ProviderConfigurationError(
        message=(
            f"No AI provider properly configured. Issues found:\n{issues}"
            "\n\nPlease configure at least one provider with the required "
            "environment variables."
        ),
        errors=errors,
    )


def default_candidate(role: ModelRole | str, env: ProviderEnvironment) -> Candidate:
    """
    Static fallback used when provider settings could not be read.

    Always Groq with catalog model ids; validation is not consulted.
    """
    return build_candidate(Provider.GROQ, role, env)


def resolve_for_role(
    role: ModelRole | str,
    env: ProviderEnvironment,
    settings: ProviderSettings | None,
) -> Candidate:
    """
    Two-tier resolution.

    settings is None means the settings store could not be read; the static
    Groq default is returned. Otherwise resolution follows the stored
    preference and overrides, and ProviderConfigurationError propagates.
    """
    if settings is None:
        logger.warning(f"Provider settings unavailable, using Groq default for {role_key(role)}")
        return default_candidate(role, env)

    return resolve_candidates(
        role,
        env,
        settings.default_provider_preference,
        groq_overrides=settings.overrides_for(Provider.GROQ),
        vertex_overrides=settings.overrides_for(Provider.VERTEX),
        azure_overrides=settings.overrides_for(Provider.AZURE),
    )[0]


def resolve_dynamic(
    role: ModelRole | str,
    env: ProviderEnvironment,
    load_settings: Callable[[], ProviderSettings | None] | None = None,
) -> Candidate:
    """
    Resolve a role using the provider settings currently stored.

    Settings are read on every call; there is no cache to invalidate.
    """
    if load_settings is None:
        from core.services.settings_service import SettingsService

        load_settings = SettingsService.load_provider_settings

    return resolve_for_role(role, env, load_settings())
