# =============================================================================
# core/models/provider.py - AI Provider Schemas
# =============================================================================
# These models describe how a chat request is mapped onto a vendor model:
# - ModelRole: logical purpose of a model invocation (chat, title, ...)
# - Provider: the three supported vendors (Groq, Vertex AI, Azure OpenAI)
# - ProviderEnvironment: explicit snapshot of the provider env variables
# - ValidationResult / ProviderValidation / ValidationSummary: env checks
# - ProviderSettings: preference + overrides read from the settings store
#
# Nothing in this module reads process state except
# ProviderEnvironment.from_env(), which is only called at the edges
# (scripts, app config).
# =============================================================================

from __future__ import annotations

import os
from enum import Enum
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_AZURE_API_VERSION = "2024-02-01"


class ModelRole(str, Enum):
    """
    Logical model roles requested by callers.

    The chat handler asks for a role, never for a vendor model id.
    """
    CHAT_MODEL = "chat-model"
    CHAT_MODEL_SMALL = "chat-model-small"
    CHAT_MODEL_LARGE = "chat-model-large"
    CHAT_MODEL_REASONING = "chat-model-reasoning"
    TITLE_MODEL = "title-model"
    ARTIFACT_MODEL = "artifact-model"


class Provider(str, Enum):
    """Supported AI model vendors."""
    GROQ = "groq"
    VERTEX = "vertex"
    AZURE = "azure"

    @property
    def display_name(self) -> str:
        """Short name used in configuration error messages."""
        return {
            Provider.GROQ: "Groq",
            Provider.VERTEX: "Vertex",
            Provider.AZURE: "Azure",
        }[self]


def role_key(role: ModelRole | str) -> str:
    """Normalize a role (enum or raw string) to its map key."""
    return role.value if isinstance(role, ModelRole) else str(role)


# =============================================================================
# Environment
# =============================================================================

class ProviderEnvironment(BaseModel):
    """
    Provider environment variables as an explicit, immutable struct.

    Passed into the validator and resolver at call time so both stay
    pure functions of their inputs. Empty strings are treated as unset.

    Example:
        env = ProviderEnvironment(groq_api_key="gsk_...")
        env = ProviderEnvironment.from_env()  # reads os.environ
    """

    model_config = ConfigDict(frozen=True)

    groq_api_key: str | None = None
    google_vertex_project: str | None = None
    google_vertex_location: str | None = None
    google_vertex_api_key: str | None = None
    azure_resource_name: str | None = None
    azure_api_key: str | None = None
    azure_api_version: str | None = None

    @field_validator("*", mode="before")
    @classmethod
    def _empty_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and value == "":
            return None
        return value

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ProviderEnvironment":
        """Build from a mapping of env variable names (default: os.environ)."""
        environ = os.environ if environ is None else environ
        return cls(
            groq_api_key=environ.get("GROQ_API_KEY"),
            google_vertex_project=environ.get("GOOGLE_VERTEX_PROJECT"),
            google_vertex_location=environ.get("GOOGLE_VERTEX_LOCATION"),
            google_vertex_api_key=environ.get("GOOGLE_VERTEX_API_KEY"),
            azure_resource_name=environ.get("AZURE_RESOURCE_NAME"),
            azure_api_key=environ.get("AZURE_API_KEY"),
            azure_api_version=environ.get("AZURE_API_VERSION"),
        )

    @property
    def resolved_azure_api_version(self) -> str:
        """AZURE_API_VERSION, or the default when unset."""
        return self.azure_api_version or DEFAULT_AZURE_API_VERSION

    @property
    def azure_endpoint(self) -> str | None:
        """Base URL of the Azure OpenAI resource."""
        if not self.azure_resource_name:
            return None
        return f"https://{self.azure_resource_name}.openai.azure.com"


# =============================================================================
# Validation Results
# =============================================================================

class ValidationResult(BaseModel):
    """Outcome of validating one provider's environment."""
    provider: Provider
    is_valid: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class ProviderValidation(BaseModel):
    """Validation results for all three providers."""
    groq: ValidationResult
    vertex: ValidationResult
    azure: ValidationResult

    def results(self) -> list[ValidationResult]:
        """Results in fixed provider order (groq, vertex, azure)."""
        return [self.groq, self.vertex, self.azure]

    def for_provider(self, provider: Provider) -> ValidationResult:
        return getattr(self, provider.value)


class ValidationSummary(BaseModel):
    """Aggregate view of provider validation, used by the admin API and CLI."""
    has_valid_provider: bool
    configured_providers: list[Provider]
    total_errors: int
    total_warnings: int
    details: ProviderValidation


# =============================================================================
# Stored Settings
# =============================================================================

ModelOverrides = dict[str, str]


class ProviderSettings(BaseModel):
    """
    Provider preference and per-role overrides from the settings store.

    Field aliases match the keys stored in the `settings` table
    (defaultProviderPreference, modelOverridesGroq, ...). Snake-case names
    are accepted too.
    """

    model_config = ConfigDict(populate_by_name=True)

    default_provider_preference: Provider = Field(
        default=Provider.GROQ,
        alias="defaultProviderPreference",
    )
    model_overrides_groq: ModelOverrides | None = Field(
        default=None,
        alias="modelOverridesGroq",
    )
    model_overrides_vertex: ModelOverrides | None = Field(
        default=None,
        alias="modelOverridesVertex",
    )
    model_overrides_azure: ModelOverrides | None = Field(
        default=None,
        alias="modelOverridesAzure",
    )

    @field_validator("default_provider_preference", mode="before")
    @classmethod
    def _unknown_preference_is_groq(cls, value: Any) -> Any:
        # Stored value is free-form JSON
        raw = value.value if isinstance(value, Provider) else value
        if not isinstance(raw, str) or raw not in {p.value for p in Provider}:
            return Provider.GROQ
        return raw

    @field_validator(
        "model_overrides_groq",
        "model_overrides_vertex",
        "model_overrides_azure",
        mode="before",
    )
    @classmethod
    def _keep_string_entries(cls, value: Any) -> Any:
        if not isinstance(value, Mapping):
            return None
        return {str(k): v for k, v in value.items() if isinstance(v, str)}

    def overrides_for(self, provider: Provider) -> ModelOverrides | None:
        return {
            Provider.GROQ: self.model_overrides_groq,
            Provider.VERTEX: self.model_overrides_vertex,
            Provider.AZURE: self.model_overrides_azure,
        }[provider]


class ProviderSettingsUpdate(BaseModel):
    """
    Partial update of the stored provider settings (admin console).

    Only fields that are set are written. Override keys must be known roles.
    Accepts the same camelCase keys ProviderSettings is serialized with.
    """

    model_config = ConfigDict(populate_by_name=True)

    default_provider_preference: Provider | None = Field(
        default=None,
        alias="defaultProviderPreference",
    )
    model_overrides_groq: ModelOverrides | None = Field(
        default=None,
        alias="modelOverridesGroq",
    )
    model_overrides_vertex: ModelOverrides | None = Field(
        default=None,
        alias="modelOverridesVertex",
    )
    model_overrides_azure: ModelOverrides | None = Field(
        default=None,
        alias="modelOverridesAzure",
    )

    @field_validator(
        "model_overrides_groq",
        "model_overrides_vertex",
        "model_overrides_azure",
    )
    @classmethod
    def _known_roles_only(cls, value: ModelOverrides | None) -> ModelOverrides | None:
        if value is None:
            return value
        known = {role.value for role in ModelRole}
        unknown = sorted(set(value) - known)
        if unknown:
            raise ValueError(f"Unknown model roles: {', '.join(unknown)}")
        return {k: v.strip() for k, v in value.items()}
