# =============================================================================
# core/providers/catalog.py - Static Model Catalog
# =============================================================================
# Default vendor model id for every (provider, role) pair. Admins can
# override individual entries per provider through the settings store.
# =============================================================================

from __future__ import annotations

from typing import Mapping

from core.models.provider import ModelRole, Provider, role_key

GROQ_MODELS: dict[str, str] = {
    ModelRole.CHAT_MODEL.value: "openai/gpt-oss-20b",
    ModelRole.CHAT_MODEL_SMALL.value: "openai/gpt-oss-20b",
    ModelRole.CHAT_MODEL_LARGE.value: "openai/gpt-oss-120b",
    ModelRole.CHAT_MODEL_REASONING.value: "moonshotai/kimi-k2-instruct",
    ModelRole.TITLE_MODEL.value: "openai/gpt-oss-20b",
    ModelRole.ARTIFACT_MODEL.value: "moonshotai/kimi-k2-instruct",
}

VERTEX_MODELS: dict[str, str] = {
    ModelRole.CHAT_MODEL.value: "gemini-1.5-flash",
    ModelRole.CHAT_MODEL_SMALL.value: "gemini-1.5-flash",
    ModelRole.CHAT_MODEL_LARGE.value: "gemini-1.5-pro",
    ModelRole.CHAT_MODEL_REASONING.value: "gemini-1.5-pro",
    ModelRole.TITLE_MODEL.value: "gemini-1.5-flash",
    ModelRole.ARTIFACT_MODEL.value: "gemini-1.5-pro",
}

AZURE_MODELS: dict[str, str] = {
    ModelRole.CHAT_MODEL.value: "gpt-4.1",
    ModelRole.CHAT_MODEL_SMALL.value: "gpt-4.1",
    ModelRole.CHAT_MODEL_LARGE.value: "gpt-4.1",
    ModelRole.CHAT_MODEL_REASONING.value: "gpt-4.1",
    ModelRole.TITLE_MODEL.value: "gpt-4.1",
    ModelRole.ARTIFACT_MODEL.value: "gpt-4.1",
}

MODEL_CATALOG: dict[Provider, dict[str, str]] = {
    Provider.GROQ: GROQ_MODELS,
    Provider.VERTEX: VERTEX_MODELS,
    Provider.AZURE: AZURE_MODELS,
}

# Role used when a requested role has no catalog entry
DEFAULT_ROLE = ModelRole.CHAT_MODEL.value


def model_id_for(
    provider: Provider,
    role: ModelRole | str,
    overrides: Mapping[str, str] | None = None,
) -> str:
    """
    Pick the vendor model id for a role.

    Precedence: trimmed non-empty override, then the catalog entry for the
    role, then the catalog entry for the default chat role.
    """
    key = role_key(role)
    override = (overrides or {}).get(key)
    if isinstance(override, str) and override.strip():
        return override.strip()

    catalog = MODEL_CATALOG[provider]
    return catalog.get(key) or catalog[DEFAULT_ROLE]
