# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Converse API:
# - test_env_validation.py: Provider environment validation
# - test_resolver.py: Model role to provider/model resolution
# - test_language_models.py: Vendor SDK wrappers and reasoning extraction
# - test_settings_service.py: Stored provider settings
# - test_provider_health.py: Provider health probes
# - test_pricing.py: Pricing plans (models, service, endpoints, seed script)
# - test_api.py: API endpoints
#
# Run tests with: pytest
# =============================================================================
