# =============================================================================
# core/models/health.py - Provider Health Schemas
# =============================================================================
# Response shapes for the admin provider dashboard:
# - ProviderHealth: one vendor's configuration and reachability
# - ProvidersHealthReport: all vendors plus an overall status
# - AzureModelsResponse: deployments available on the Azure resource
# =============================================================================

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class ProviderStatus(str, Enum):
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"
    UNCONFIGURED = "unconfigured"


class OverallStatus(str, Enum):
    """
    Overall provider availability.

    - operational: at least one provider answered
    - degraded: providers are configured but none answered
    - offline: nothing is configured
    """
    OPERATIONAL = "operational"
    DEGRADED = "degraded"
    OFFLINE = "offline"


class ProviderHealth(BaseModel):
    name: str
    status: ProviderStatus = ProviderStatus.UNCONFIGURED
    configured: bool
    error: str | None = None
    details: dict[str, Any] | None = None


class HealthSummary(BaseModel):
    total: int
    healthy: int
    configured: int
    unconfigured: int


class ProvidersHealthReport(BaseModel):
    timestamp: datetime
    status: OverallStatus
    providers: list[ProviderHealth]
    summary: HealthSummary

    @classmethod
    def from_providers(cls, providers: list[ProviderHealth]) -> "ProvidersHealthReport":
        """Build the report, deriving overall status and counts."""
        healthy = sum(1 for p in providers if p.status == ProviderStatus.HEALTHY)
        configured = sum(1 for p in providers if p.configured)

        if healthy > 0:
            status = OverallStatus.OPERATIONAL
        elif configured > 0:
            status = OverallStatus.DEGRADED
        else:
            status = OverallStatus.OFFLINE

        return cls(
            timestamp=datetime.now(timezone.utc),
            status=status,
            providers=providers,
            summary=HealthSummary(
                total=len(providers),
                healthy=healthy,
                configured=configured,
                unconfigured=len(providers) - configured,
            ),
        )


class AzureModel(BaseModel):
    id: str
    name: str


class AzureModelsResponse(BaseModel):
    models: list[AzureModel] = Field(default_factory=list)
    warning: str | None = None
    error: str | None = None
