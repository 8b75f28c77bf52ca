# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends(), and tests swap
# them out through app.dependency_overrides.
# =============================================================================

from typing import Annotated, Callable

from fastapi import Depends

from app.config import settings
from core.models.provider import ProviderEnvironment, ProviderSettings
from core.services.provider_health_service import ProviderHealthService
from core.services.settings_service import SettingsService


def get_provider_environment() -> ProviderEnvironment:
    """Provider variables from the application settings."""
    return settings.provider_environment


def get_settings_loader() -> Callable[[], ProviderSettings | None]:
    """
    Loader used by model resolution.

    Returns a callable so settings are read when resolution happens,
    never cached between requests.
    """
    return SettingsService.load_provider_settings


def get_provider_health_service() -> ProviderHealthService:
    return ProviderHealthService(timeout=settings.PROVIDER_HEALTH_TIMEOUT_SECONDS)


# Type aliases for dependency injection
ProviderEnvDep = Annotated[ProviderEnvironment, Depends(get_provider_environment)]
SettingsLoaderDep = Annotated[
    Callable[[], ProviderSettings | None], Depends(get_settings_loader)
]
HealthServiceDep = Annotated[ProviderHealthService, Depends(get_provider_health_service)]
