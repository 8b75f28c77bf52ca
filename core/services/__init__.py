# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .settings_service import SettingsService, PROVIDER_SETTING_KEYS
from .provider_health_service import ProviderHealthService
from .chat_service import ChatService

__all__ = [
    "SettingsService",
    "PROVIDER_SETTING_KEYS",
    "ProviderHealthService",
    "ChatService",
]
