# =============================================================================
# core/services/chat_service.py - Chat Completion Business Logic
# =============================================================================
# Resolves the requested model role against the current provider settings
# and runs the completion on the chosen vendor model.
# =============================================================================

import logging
from typing import Callable

from core.models.chat import ChatCompletionRequest, ChatCompletionResponse
from core.models.provider import ProviderEnvironment, ProviderSettings
from core.providers.resolver import resolve_for_role

logger = logging.getLogger(__name__)


class ChatService:
    """Service for chat completions."""

    @staticmethod
    def complete(
        request: ChatCompletionRequest,
        env: ProviderEnvironment,
        load_settings: Callable[[], ProviderSettings | None],
    ) -> ChatCompletionResponse:
        """
        Run a chat completion for the requested role.

        Raises:
            ProviderConfigurationError: If no provider is configured
            ModelInvocationError: If the vendor call fails
        """
        candidate = resolve_for_role(request.model, env, load_settings())

        result = candidate.model.generate(
            request.messages_as_dicts(),
            temperature=request.temperature,
            max_tokens=request.max_tokens,
        )
        logger.debug(
            f"Completion from {result.provider.value}:{result.model_id} "
            f"({len(result.text)} chars)"
        )

        return ChatCompletionResponse(
            provider=result.provider,
            model_id=result.model_id,
            content=result.text,
            reasoning=result.reasoning,
            usage=result.usage,
        )
