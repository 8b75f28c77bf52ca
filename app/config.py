# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import settings
#   print(settings.SUPABASE_URL)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
#
# AI provider variables are optional here: a deployment only needs one of
# the three providers configured. Use `settings.provider_environment` to get
# the explicit struct consumed by the validator and resolver.
# =============================================================================

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.models.provider import ProviderEnvironment


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses pydantic-settings to:
    - Automatically load from .env file
    - Validate types and constraints
    - Provide sensible defaults for development

    All settings are accessed via the global `settings` instance.
    """

    # -------------------------------------------------------------------------
    # Supabase Configuration
    # -------------------------------------------------------------------------
    # These are required - the settings store and auth live in Supabase

    SUPABASE_URL: str = Field(
        ...,  # ... means required (no default)
        description="Supabase project URL (e.g., https://xxx.supabase.co)"
    )

    SUPABASE_ANON_KEY: str = Field(
        ...,
        description="Supabase anon/public API key"
    )

    SUPABASE_SERVICE_KEY: str = Field(
        ...,
        description="Supabase service_role key (bypasses RLS)"
    )

    SUPABASE_JWT_SECRET: str = Field(
        default="",
        description="Legacy HS256 JWT secret (only needed for HS256 tokens)"
    )

    # -------------------------------------------------------------------------
    # AI Provider Configuration
    # -------------------------------------------------------------------------
    # At least one provider must be configured for chat to work.

    GROQ_API_KEY: str | None = Field(
        default=None,
        description="Groq API key"
    )

    GOOGLE_VERTEX_PROJECT: str | None = Field(
        default=None,
        description="Google Cloud project hosting Vertex AI"
    )

    GOOGLE_VERTEX_LOCATION: str | None = Field(
        default=None,
        description="Vertex AI region (e.g., us-central1)"
    )

    GOOGLE_VERTEX_API_KEY: str | None = Field(
        default=None,
        description="Optional Vertex API key (otherwise Application Default Credentials)"
    )

    AZURE_RESOURCE_NAME: str | None = Field(
        default=None,
        description="Azure OpenAI resource name"
    )

    AZURE_API_KEY: str | None = Field(
        default=None,
        description="Azure OpenAI API key"
    )

    AZURE_API_VERSION: str | None = Field(
        default=None,
        description="Azure OpenAI API version (defaults to 2024-02-01)"
    )

    PROVIDER_HEALTH_TIMEOUT_SECONDS: float = Field(
        default=10.0,
        gt=0,
        le=60,
        description="Timeout for admin provider health probes"
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Current environment"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging, auto-reload)"
    )

    API_HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to"
    )

    API_PORT: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Port for the API server"
    )

    # CORS origins (comma-separated string that gets parsed)
    CORS_ORIGINS: str = Field(
        default="http://localhost:3000",
        description="Allowed CORS origins (comma-separated)"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        # Empty variables count as unset (matters for optional provider keys)
        env_ignore_empty=True,
        case_sensitive=True,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse CORS_ORIGINS string into a list.

        Example: "http://localhost:3000, https://myapp.com" -> ["http://localhost:3000", "https://myapp.com"]
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def provider_environment(self) -> ProviderEnvironment:
        """Snapshot of the AI provider variables as an explicit struct."""
        return ProviderEnvironment(
            groq_api_key=self.GROQ_API_KEY,
            google_vertex_project=self.GOOGLE_VERTEX_PROJECT,
            google_vertex_location=self.GOOGLE_VERTEX_LOCATION,
            google_vertex_api_key=self.GOOGLE_VERTEX_API_KEY,
            azure_resource_name=self.AZURE_RESOURCE_NAME,
            azure_api_key=self.AZURE_API_KEY,
            azure_api_version=self.AZURE_API_VERSION,
        )

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once,
    not on every access.

    Returns:
        Settings: The application settings instance
    """
    return Settings()


# Global settings instance for easy importing
# Usage: from app.config import settings
settings = get_settings()
