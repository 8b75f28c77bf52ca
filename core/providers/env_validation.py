# =============================================================================
# core/providers/env_validation.py - Provider Environment Validation
# =============================================================================
# Validates the environment variables each AI provider needs and produces
# helpful error and warning messages.
#
# All validators are pure functions of a ProviderEnvironment snapshot.
#
# Usage:
#   from core.providers.env_validation import validate_all_providers
#   validation = validate_all_providers(ProviderEnvironment.from_env())
#   if not validation.azure.is_valid:
#       print(validation.azure.errors)
# =============================================================================

from __future__ import annotations

import logging
import os
import re

from app.exceptions import ProviderConfigurationError
from core.models.provider import (
    DEFAULT_AZURE_API_VERSION,
    Provider,
    ProviderEnvironment,
    ProviderValidation,
    ValidationResult,
    ValidationSummary,
)

logger = logging.getLogger(__name__)

GROQ_MIN_KEY_LENGTH = 20
AZURE_MIN_KEY_LENGTH = 32

# Commonly used Vertex AI regions; anything else only produces a warning
KNOWN_VERTEX_LOCATIONS = (
    "us-central1",
    "us-east1",
    "us-west1",
    "us-west4",
    "europe-west1",
    "europe-west4",
    "asia-northeast1",
    "asia-southeast1",
)

AZURE_RESOURCE_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9-]+$")
AZURE_API_VERSION_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


# =============================================================================
# Per-Provider Validators
# =============================================================================

def validate_groq_env(env: ProviderEnvironment) -> ValidationResult:
    """Validate Groq configuration (GROQ_API_KEY)."""
    errors: list[str] = []
    warnings: list[str] = []

    if not env.groq_api_key:
        errors.append("GROQ_API_KEY is required but not set")
    elif len(env.groq_api_key) < GROQ_MIN_KEY_LENGTH:
        warnings.append(
            f"GROQ_API_KEY appears to be too short "
            f"(should be at least {GROQ_MIN_KEY_LENGTH} characters)"
        )

    return ValidationResult(
        provider=Provider.GROQ,
        is_valid=not errors,
        errors=errors,
        warnings=warnings,
    )


def validate_vertex_env(env: ProviderEnvironment) -> ValidationResult:
    """
    Validate Google Vertex AI configuration.

    Project and location are required. The API key is optional: without it
    the client uses Application Default Credentials.
    """
    errors: list[str] = []
    warnings: list[str] = []

    if not env.google_vertex_project:
        errors.append("GOOGLE_VERTEX_PROJECT is required but not set")

    if not env.google_vertex_location:
        errors.append("GOOGLE_VERTEX_LOCATION is required but not set")
    elif env.google_vertex_location not in KNOWN_VERTEX_LOCATIONS:
        warnings.append(
            f'GOOGLE_VERTEX_LOCATION "{env.google_vertex_location}" '
            f"is not a commonly used region"
        )

    if not env.google_vertex_api_key:
        warnings.append(
            "GOOGLE_VERTEX_API_KEY not set (will use Application Default Credentials)"
        )

    return ValidationResult(
        provider=Provider.VERTEX,
        is_valid=not errors,
        errors=errors,
        warnings=warnings,
    )


def validate_azure_env(env: ProviderEnvironment) -> ValidationResult:
    """
    Validate Azure OpenAI configuration.

    The resource name becomes part of the endpoint hostname, so it may only
    contain letters, digits and hyphens.
    """
    errors: list[str] = []
    warnings: list[str] = []

    if not env.azure_resource_name:
        errors.append("AZURE_RESOURCE_NAME is required but not set")
    elif not AZURE_RESOURCE_NAME_PATTERN.match(env.azure_resource_name):
        errors.append(
            "AZURE_RESOURCE_NAME contains invalid characters "
            "(only alphanumeric and hyphens allowed)"
        )

    if not env.azure_api_key:
        errors.append("AZURE_API_KEY is required but not set")
    elif len(env.azure_api_key) < AZURE_MIN_KEY_LENGTH:
        warnings.append(
            f"AZURE_API_KEY appears to be too short "
            f"(should be at least {AZURE_MIN_KEY_LENGTH} characters)"
        )

    if not env.azure_api_version:
        warnings.append(
            f"AZURE_API_VERSION not set (will use default: {DEFAULT_AZURE_API_VERSION})"
        )
    elif not AZURE_API_VERSION_PATTERN.match(env.azure_api_version):
        warnings.append(
            f"AZURE_API_VERSION format should be YYYY-MM-DD (e.g., {DEFAULT_AZURE_API_VERSION})"
        )

    return ValidationResult(
        provider=Provider.AZURE,
        is_valid=not errors,
        errors=errors,
        warnings=warnings,
    )


# =============================================================================
# Aggregate Helpers
# =============================================================================

def validate_all_providers(env: ProviderEnvironment) -> ProviderValidation:
    """Validate all AI provider configurations."""
    return ProviderValidation(
        groq=validate_groq_env(env),
        vertex=validate_vertex_env(env),
        azure=validate_azure_env(env),
    )


def get_configured_providers(env: ProviderEnvironment) -> list[Provider]:
    """Providers with a valid configuration, in groq/vertex/azure order."""
    validation = validate_all_providers(env)
    return [result.provider for result in validation.results() if result.is_valid]


def has_valid_provider(env: ProviderEnvironment) -> bool:
    """Check if at least one AI provider is properly configured."""
    return len(get_configured_providers(env)) > 0


def get_validation_summary(env: ProviderEnvironment) -> ValidationSummary:
    """Detailed validation summary for the admin console and CLI."""
    details = validate_all_providers(env)
    configured = [r.provider for r in details.results() if r.is_valid]

    return ValidationSummary(
        has_valid_provider=bool(configured),
        configured_providers=configured,
        total_errors=sum(len(r.errors) for r in details.results()),
        total_warnings=sum(len(r.warnings) for r in details.results()),
        details=details,
    )


def require_valid_provider(env: ProviderEnvironment) -> None:
    """
    Raise if no AI provider is properly configured.

    Raises:
        ProviderConfigurationError: listing each invalid provider's errors
    """
    summary = get_validation_summary(env)
    if summary.has_valid_provider:
        return

    invalid = [r for r in summary.details.results() if not r.is_valid]
    error_lines = "\n".join(
        f"{r.provider.value}: {', '.join(r.errors)}" for r in invalid
    )
    raise ProviderConfigurationError(
        message=(
            "No AI provider is properly configured. Please fix the following issues:"
            f"\n\n{error_lines}\n\nRefer to the setup documentation for help."
        ),
        errors={r.provider.value: r.errors for r in invalid},
    )


def format_validation_report(summary: ValidationSummary) -> str:
    """
    Render a validation summary as a human-readable multi-line report.

    Used by scripts/validate_env.py.
    """
    lines = [
        "=== AI Provider Configuration Validation ===",
        f"Status: {'Valid' if summary.has_valid_provider else 'Invalid'}",
        "Configured Providers: "
        + (", ".join(p.value for p in summary.configured_providers) or "None"),
        f"Total Errors: {summary.total_errors}",
        f"Total Warnings: {summary.total_warnings}",
    ]

    for result in summary.details.results():
        lines.append("")
        lines.append(f"--- {result.provider.value.upper()} Provider ---")
        lines.append(f"Status: {'Valid' if result.is_valid else 'Invalid'}")

        if result.errors:
            lines.append("Errors:")
            lines.extend(f"  [error] {error}" for error in result.errors)

        if result.warnings:
            lines.append("Warnings:")
            lines.extend(f"  [warn]  {warning}" for warning in result.warnings)

        if not result.errors and not result.warnings:
            lines.append("  No issues found")

    lines.append("")
    lines.append("=" * 44)
    return "\n".join(lines)


# =============================================================================
# Environment Variable Helpers
# =============================================================================

def get_required_env(name: str, description: str | None = None) -> str:
    """
    Read a required environment variable.

    Raises:
        ValueError: If the variable is unset or empty
    """
    value = os.environ.get(name)
    if not value:
        desc = f" ({description})" if description else ""
        raise ValueError(f"Environment variable {name} is required{desc} but not set")
    return value


def get_env_with_default(name: str, default_value: str) -> str:
    """Read an environment variable, falling back when unset or empty."""
    return os.environ.get(name) or default_value
