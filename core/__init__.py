# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the provider logic behind the API:
# - models/: Pydantic schemas for roles, settings, chat and health
# - providers/: Environment validation, model catalog, resolution
# - services/: Settings store, provider health probes, chat completions
#
# models/ and providers/ never read app.config; the provider environment
# is passed in explicitly so resolution can be tested without settings.
# =============================================================================
