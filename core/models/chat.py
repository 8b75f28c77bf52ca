# =============================================================================
# core/models/chat.py - Chat Completion Schemas
# =============================================================================
# These models define the API contract for chat completions:
# - ChatMessage: One message of the conversation sent by the client
# - ChatCompletionRequest: Role to resolve + conversation
# - ChatCompletionResponse: Generated text, extracted reasoning, and which
#   provider/model actually served the request
#
# Flow:
# 1. Client sends ChatCompletionRequest with a logical model role
# 2. The resolver picks a provider and vendor model id for that role
# 3. The response reports the provider and model id that were used
# =============================================================================

from enum import Enum

from pydantic import BaseModel, Field

from .provider import ModelRole, Provider


class MessageRole(str, Enum):
    """
    Who sent the message in a conversation.

    - system: Instructions for the model
    - user: The human user
    - assistant: Previous model replies
    """
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class ChatMessage(BaseModel):
    """A single conversation message."""
    role: MessageRole
    content: str = Field(..., min_length=1)


class ChatCompletionRequest(BaseModel):
    """
    Request body for POST /chat.

    Example:
        {
            "model": "chat-model-reasoning",
            "messages": [{"role": "user", "content": "Plan my week"}]
        }
    """
    model: ModelRole = Field(
        default=ModelRole.CHAT_MODEL,
        description="Logical model role to resolve"
    )
    messages: list[ChatMessage] = Field(..., min_length=1)
    temperature: float | None = Field(default=None, ge=0.0, le=2.0)
    max_tokens: int | None = Field(default=None, ge=1, le=32768)

    def messages_as_dicts(self) -> list[dict[str, str]]:
        return [{"role": m.role.value, "content": m.content} for m in self.messages]


class ChatCompletionResponse(BaseModel):
    """Response body for POST /chat."""
    provider: Provider
    model_id: str
    content: str
    reasoning: str | None = None
    usage: dict[str, int] = Field(default_factory=dict)
