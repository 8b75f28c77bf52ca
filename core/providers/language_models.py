# =============================================================================
# core/providers/language_models.py - Callable Model Handles
# =============================================================================
# Thin wrappers around the vendor SDKs that expose one interface:
#
#   model.generate(messages) -> GenerationResult
#
# Vendor clients are created lazily on the first generate() call, so
# resolving a model never touches the network or credential files.
#
# ReasoningModel wraps any model and splits <think>...</think> blocks out of
# the generated text into GenerationResult.reasoning.
# =============================================================================

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable

from google import genai
from google.genai import types as genai_types
from groq import Groq
from openai import AzureOpenAI

from app.exceptions import ModelInvocationError
from core.models.provider import Provider, ProviderEnvironment

logger = logging.getLogger(__name__)

REASONING_TAG = "think"


# =============================================================================
# Results
# =============================================================================

@dataclass(frozen=True)
class GenerationResult:
    """Output of a single generate() call."""
    text: str
    provider: Provider
    model_id: str
    reasoning: str | None = None
    usage: dict[str, int] = field(default_factory=dict)
    raw: Any = None


# =============================================================================
# Base Model
# =============================================================================

class LanguageModel(ABC):
    """
    A vendor model bound to a provider and model id.

    Subclasses implement `_generate` against their SDK client. Errors from
    the SDK are wrapped in ModelInvocationError.
    """

    def __init__(
        self,
        provider: Provider,
        model_id: str,
        client_factory: Callable[[], Any],
    ):
        self.provider = provider
        self.model_id = model_id
        self._client_factory = client_factory
        self._client: Any = None

    @property
    def client(self) -> Any:
        """Vendor SDK client, created on first use."""
        if self._client is None:
            self._client = self._client_factory()
        return self._client

    def generate(
        self,
        messages: list[dict[str, str]],
        *,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> GenerationResult:
        """
        Run a chat completion.

        Args:
            messages: [{"role": "system"|"user"|"assistant", "content": "..."}]
            temperature: Sampling temperature (vendor default when None)
            max_tokens: Output token cap (vendor default when None)

        Raises:
            ModelInvocationError: If the vendor call fails
        """
        try:
            return self._generate(messages, temperature=temperature, max_tokens=max_tokens)
        except ModelInvocationError:
            raise
        except Exception as e:
            logger.error(f"{self.provider.value} call failed for {self.model_id}: {e}")
            raise ModelInvocationError(self.provider.value, self.model_id, str(e))

    @abstractmethod
    def _generate(
        self,
        messages: list[dict[str, str]],
        *,
        temperature: float | None,
        max_tokens: int | None,
    ) -> GenerationResult:
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(provider={self.provider.value!r}, model_id={self.model_id!r})"


class ChatCompletionsModel(LanguageModel):
    """Model served through an OpenAI-style chat.completions API (Groq, Azure)."""

    def _generate(self, messages, *, temperature, max_tokens):
        params: dict[str, Any] = {"model": self.model_id, "messages": messages}
        if temperature is not None:
            params["temperature"] = temperature
        if max_tokens is not None:
            params["max_tokens"] = max_tokens

        response = self.client.chat.completions.create(**params)

        usage = {}
        if getattr(response, "usage", None):
            usage = {
                "prompt_tokens": response.usage.prompt_tokens or 0,
                "completion_tokens": response.usage.completion_tokens or 0,
                "total_tokens": response.usage.total_tokens or 0,
            }

        return GenerationResult(
            text=response.choices[0].message.content or "",
            provider=self.provider,
            model_id=self.model_id,
            usage=usage,
            raw=response,
        )


class GeminiModel(LanguageModel):
    """Gemini model served through Vertex AI via google-genai."""

    def _generate(self, messages, *, temperature, max_tokens):
        system_parts = [m["content"] for m in messages if m["role"] == "system"]
        contents = [
            genai_types.Content(
                role="model" if m["role"] == "assistant" else "user",
                parts=[genai_types.Part(text=m["content"])],
            )
            for m in messages
            if m["role"] != "system"
        ]

        config = genai_types.GenerateContentConfig(
            system_instruction="\n\n".join(system_parts) if system_parts else None,
            temperature=temperature,
            max_output_tokens=max_tokens,
        )

        response = self.client.models.generate_content(
            model=self.model_id,
            contents=contents,
            config=config,
        )

        usage = {}
        meta = getattr(response, "usage_metadata", None)
        if meta:
            usage = {
                "prompt_tokens": int(getattr(meta, "prompt_token_count", 0) or 0),
                "completion_tokens": int(getattr(meta, "candidates_token_count", 0) or 0),
                "total_tokens": int(getattr(meta, "total_token_count", 0) or 0),
            }

        return GenerationResult(
            text=response.text or "",
            provider=self.provider,
            model_id=self.model_id,
            usage=usage,
            raw=response,
        )


# =============================================================================
# Reasoning Extraction
# =============================================================================

def extract_reasoning(
    text: str,
    tag_name: str = REASONING_TAG,
    separator: str = "\n",
) -> tuple[str | None, str]:
    """
    Split tagged reasoning out of generated text.

    Every <tag>...</tag> block is removed from the text; the block contents
    are joined with `separator`. Where a block sat between two pieces of
    text, the pieces are joined with `separator` as well.

    Returns:
        (reasoning or None when no block was found, remaining text)

    Example:
        >>> extract_reasoning("<think>add 2+2</think>4")
        ('add 2+2', '4')
    """
    pattern = re.compile(rf"<{re.escape(tag_name)}>(.*?)</{re.escape(tag_name)}>", re.DOTALL)
    matches = list(pattern.finditer(text))
    if not matches:
        return None, text

    reasoning = separator.join(m.group(1) for m in matches)

    remaining = text
    for match in reversed(matches):
        before = remaining[:match.start()]
        after = remaining[match.end():]
        joiner = separator if before and after else ""
        remaining = before + joiner + after

    return reasoning, remaining


class ReasoningModel(LanguageModel):
    """
    Wraps a model and extracts tagged reasoning from its output.

    Applied to the reasoning role for every provider.
    """

    def __init__(self, inner: LanguageModel, tag_name: str = REASONING_TAG):
        super().__init__(inner.provider, inner.model_id, lambda: inner.client)
        self.inner = inner
        self.tag_name = tag_name

    def _generate(self, messages, *, temperature, max_tokens):
        result = self.inner.generate(messages, temperature=temperature, max_tokens=max_tokens)
        reasoning, text = extract_reasoning(result.text, self.tag_name)
        return GenerationResult(
            text=text,
            provider=result.provider,
            model_id=result.model_id,
            reasoning=reasoning,
            usage=result.usage,
            raw=result.raw,
        )

    def __repr__(self) -> str:
        return f"ReasoningModel({self.inner!r}, tag_name={self.tag_name!r})"


# =============================================================================
# Factories
# =============================================================================

def create_groq_model(model_id: str, env: ProviderEnvironment) -> LanguageModel:
    return ChatCompletionsModel(
        Provider.GROQ,
        model_id,
        lambda: Groq(api_key=env.groq_api_key),
    )


def create_vertex_model(model_id: str, env: ProviderEnvironment) -> LanguageModel:
    def build_client() -> genai.Client:
        # API key and project/location are mutually exclusive arguments in
        # google-genai, so the key travels as a header
        http_options = None
        if env.google_vertex_api_key:
            http_options = genai_types.HttpOptions(
                headers={"x-goog-api-key": env.google_vertex_api_key}
            )
        return genai.Client(
            vertexai=True,
            project=env.google_vertex_project,
            location=env.google_vertex_location,
            http_options=http_options,
        )

    return GeminiModel(Provider.VERTEX, model_id, build_client)


def create_azure_model(model_id: str, env: ProviderEnvironment) -> LanguageModel:
    # model_id is the Azure deployment name
    return ChatCompletionsModel(
        Provider.AZURE,
        model_id,
        lambda: AzureOpenAI(
            azure_endpoint=env.azure_endpoint,
            api_key=env.azure_api_key,
            api_version=env.resolved_azure_api_version,
        ),
    )


MODEL_FACTORIES: dict[Provider, Callable[[str, ProviderEnvironment], LanguageModel]] = {
    Provider.GROQ: create_groq_model,
    Provider.VERTEX: create_vertex_model,
    Provider.AZURE: create_azure_model,
}


def create_language_model(
    provider: Provider,
    model_id: str,
    env: ProviderEnvironment,
) -> LanguageModel:
    """Build the callable model handle for a provider and vendor model id."""
    return MODEL_FACTORIES[provider](model_id, env)
