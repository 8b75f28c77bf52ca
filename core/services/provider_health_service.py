# =============================================================================
# core/services/provider_health_service.py - Provider Health Probes
# =============================================================================
# Live checks behind the admin provider dashboard:
# - Groq: lists models with the configured key
# - Vertex AI: configuration check only (auth needs a full SDK flow)
# - Azure OpenAI: lists deployments on the configured resource
#
# Also lists Azure deployments for the admin override picker, falling back
# to a fixed model list whenever Azure cannot be queried.
# =============================================================================

import logging
from typing import Any

import httpx

from core.models.health import (
    AzureModel,
    AzureModelsResponse,
    ProviderHealth,
    ProvidersHealthReport,
    ProviderStatus,
)
from core.models.provider import ProviderEnvironment

logger = logging.getLogger(__name__)

GROQ_MODELS_URL = "https://api.groq.com/openai/v1/models"
DEFAULT_TIMEOUT_SECONDS = 10.0

FALLBACK_AZURE_MODELS = [AzureModel(id="gpt-4.1", name="GPT-4.1")]


def azure_deployments_url(env: ProviderEnvironment) -> str:
    return (
        f"{env.azure_endpoint}/openai/deployments"
        f"?api-version={env.resolved_azure_api_version}"
    )


def _http_error(response: httpx.Response) -> str:
    return f"HTTP {response.status_code}: {response.reason_phrase}"


def _data_list(response: httpx.Response) -> list:
    """
    The `data` list of a successful list response.

    Raises:
        ValueError: If the body is not JSON or has no `data` list
    """
    body = response.json()
    if not isinstance(body, dict) or not isinstance(body.get("data"), list):
        raise ValueError("Unexpected API response format")
    return body["data"]


def _azure_error_message(response: httpx.Response) -> str:
    """Prefer the error message from Azure's JSON body, if there is one."""
    try:
        message = (response.json().get("error") or {}).get("message")
    except (ValueError, AttributeError):
        message = None
    return message or _http_error(response)


class ProviderHealthService:
    """
    Service for checking AI provider reachability.

    `transport` lets tests plug in an httpx.MockTransport.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.timeout = timeout
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self.transport)

    # -------------------------------------------------------------------------
    # Health
    # -------------------------------------------------------------------------

    async def check_all(self, env: ProviderEnvironment) -> ProvidersHealthReport:
        """Check every provider and derive the overall status."""
        async with self._client() as client:
            providers = [
                await self.check_groq(env, client),
                self.check_vertex(env),
                await self.check_azure(env, client),
            ]

        report = ProvidersHealthReport.from_providers(providers)
        logger.info(
            f"Provider health: {report.status.value} "
            f"({report.summary.healthy}/{report.summary.total} healthy)"
        )
        return report

    async def check_groq(
        self,
        env: ProviderEnvironment,
        client: httpx.AsyncClient,
    ) -> ProviderHealth:
        health = ProviderHealth(name="Groq", configured=bool(env.groq_api_key))

        if not health.configured:
            health.error = "GROQ_API_KEY not configured"
            return health

        try:
            response = await client.get(
                GROQ_MODELS_URL,
                headers={
                    "Authorization": f"Bearer {env.groq_api_key}",
                    "Content-Type": "application/json",
                },
            )
        except httpx.HTTPError as e:
            health.status = ProviderStatus.UNHEALTHY
            health.error = str(e) or "Connection failed"
            return health

        if not response.is_success:
            health.status = ProviderStatus.UNHEALTHY
            health.error = _http_error(response)
            return health

        try:
            models = _data_list(response)
        except ValueError as e:
            health.status = ProviderStatus.UNHEALTHY
            health.error = f"Invalid response: {e}"
            return health

        health.status = ProviderStatus.HEALTHY
        health.details = {
            "modelsCount": len(models),
            "endpoint": GROQ_MODELS_URL,
        }
        return health

    def check_vertex(self, env: ProviderEnvironment) -> ProviderHealth:
        health = ProviderHealth(
            name="Google Vertex AI",
            configured=bool(env.google_vertex_project and env.google_vertex_location),
        )

        if not health.configured:
            missing = []
            if not env.google_vertex_project:
                missing.append("GOOGLE_VERTEX_PROJECT")
            if not env.google_vertex_location:
                missing.append("GOOGLE_VERTEX_LOCATION")
            health.error = f"Missing required variables: {', '.join(missing)}"
            return health

        health.status = ProviderStatus.HEALTHY
        health.details = {
            "project": env.google_vertex_project,
            "location": env.google_vertex_location,
            "hasApiKey": bool(env.google_vertex_api_key),
            "note": "Configuration valid, actual model availability depends on deployment",
        }
        return health

    async def check_azure(
        self,
        env: ProviderEnvironment,
        client: httpx.AsyncClient,
    ) -> ProviderHealth:
        health = ProviderHealth(
            name="Azure OpenAI",
            configured=bool(env.azure_resource_name and env.azure_api_key),
        )

        if not health.configured:
            missing = []
            if not env.azure_resource_name:
                missing.append("AZURE_RESOURCE_NAME")
            if not env.azure_api_key:
                missing.append("AZURE_API_KEY")
            health.error = f"Missing required variables: {', '.join(missing)}"
            return health

        url = azure_deployments_url(env)
        try:
            response = await client.get(
                url,
                headers={"api-key": env.azure_api_key, "Content-Type": "application/json"},
            )
        except httpx.HTTPError as e:
            health.status = ProviderStatus.UNHEALTHY
            health.error = str(e) or "Connection failed"
            return health

        if not response.is_success:
            health.status = ProviderStatus.UNHEALTHY
            health.error = _azure_error_message(response)
            return health

        try:
            deployments = _data_list(response)
        except ValueError as e:
            health.status = ProviderStatus.UNHEALTHY
            health.error = f"Invalid response: {e}"
            return health

        health.status = ProviderStatus.HEALTHY
        health.details = {
            "resourceName": env.azure_resource_name,
            "apiVersion": env.resolved_azure_api_version,
            "deploymentsCount": len(deployments),
            "endpoint": url,
        }
        return health

    # -------------------------------------------------------------------------
    # Azure Deployments
    # -------------------------------------------------------------------------

    async def list_azure_deployments(self, env: ProviderEnvironment) -> AzureModelsResponse:
        """
        List deployments on the Azure resource.

        Never raises: on any failure the fixed fallback list is returned
        with a warning (and the error, when there is one).
        """
        if not env.azure_resource_name or not env.azure_api_key:
            return AzureModelsResponse(
                models=FALLBACK_AZURE_MODELS,
                warning="AZURE_RESOURCE_NAME or AZURE_API_KEY not set; using defaults",
            )

        try:
            async with self._client() as client:
                response = await client.get(
                    azure_deployments_url(env),
                    headers={"api-key": env.azure_api_key, "Content-Type": "application/json"},
                )
        except httpx.HTTPError as e:
            logger.warning(f"Azure deployments request failed: {e}")
            return AzureModelsResponse(
                models=FALLBACK_AZURE_MODELS,
                error=f"Failed to query Azure OpenAI deployments: {e}",
                warning="Using fallback models due to connection error",
            )

        if not response.is_success:
            return AzureModelsResponse(
                models=FALLBACK_AZURE_MODELS,
                error=f"Azure API Error: {_azure_error_message(response)}",
                warning="Using fallback models due to API error",
            )

        try:
            deployments = _data_list(response)
        except ValueError:
            return AzureModelsResponse(
                models=FALLBACK_AZURE_MODELS,
                warning="Unexpected API response format, using fallback models",
            )

        models = [m for m in map(_deployment_to_model, deployments) if m is not None]
        if not models:
            return AzureModelsResponse(
                models=FALLBACK_AZURE_MODELS,
                warning="No deployments found in Azure OpenAI resource, using fallback models",
            )

        return AzureModelsResponse(models=models)


def _deployment_to_model(deployment: Any) -> AzureModel | None:
    if not isinstance(deployment, dict):
        return None

    model_id = str(deployment.get("id") or deployment.get("model") or deployment.get("name") or "")
    if not model_id.strip():
        return None

    name = deployment.get("model") or deployment.get("id") or deployment.get("name") or model_id
    return AzureModel(id=model_id.strip(), name=str(name).strip())
