# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Errors carry a machine-readable code plus a suggestion telling the
# operator how to fix the problem, not just what failed.
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse


class ConverseException(Exception):
    """
    Base exception for the Converse API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "CONVERSE_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Provider Exceptions
# =============================================================================

class ProviderConfigurationError(ConverseException):
    """
    Raised when no AI provider has a valid configuration.

    The message lists every provider's validation errors, one per line,
    so the operator can fix whichever provider they intend to use.
    """

    def __init__(self, message: str, errors: dict[str, list[str]] | None = None):
        super().__init__(
            message=message,
            code="NO_PROVIDER_CONFIGURED",
            status_code=503,
            suggestion="Configure at least one provider: GROQ_API_KEY, "
                       "GOOGLE_VERTEX_PROJECT + GOOGLE_VERTEX_LOCATION, "
                       "or AZURE_RESOURCE_NAME + AZURE_API_KEY",
            details={"errors": errors} if errors else None,
        )


class ModelInvocationError(ConverseException):
    """Raised when the vendor API call for a resolved model fails."""

    def __init__(self, provider: str, model_id: str, error: str):
        super().__init__(
            message=f"Model call to {provider} ({model_id}) failed: {error}",
            code="MODEL_INVOCATION_FAILED",
            status_code=502,
            suggestion="Check the provider health in the admin console or "
                       "switch the default provider preference",
            details={"provider": provider, "model_id": model_id},
        )


# =============================================================================
# Settings Exceptions
# =============================================================================

class SettingsUpdateError(ConverseException):
    """Raised when a value cannot be written to the settings store."""

    def __init__(self, error: str, setting: str = "provider settings"):
        super().__init__(
            message=f"Failed to update {setting}: {error}",
            code="SETTINGS_UPDATE_FAILED",
            status_code=500,
            suggestion="Check that the settings table exists and is writable "
                       "with the service role key",
            details={"error": error},
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def converse_exception_handler(
    request: Request,
    exc: ConverseException
) -> JSONResponse:
    """
    Convert ConverseException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle Pydantic validation errors.

    Converts validation errors to user-friendly messages.
    """
    return JSONResponse(
        status_code=422,
        content={
            "detail": "Validation error",
            "code": "VALIDATION_ERROR",
            "errors": str(exc)
        }
    )
