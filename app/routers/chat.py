# =============================================================================
# app/routers/chat.py - Chat Completion Endpoint
# =============================================================================
# Resolves the requested model role to a vendor model and returns the
# completion. Vendor SDK calls are blocking, so they run in the threadpool.
# =============================================================================

import logging

from fastapi import APIRouter, Depends
from starlette.concurrency import run_in_threadpool

from app.auth import get_current_user, AuthUser
from app.dependencies import ProviderEnvDep, SettingsLoaderDep
from core.models.chat import ChatCompletionRequest, ChatCompletionResponse
from core.services.chat_service import ChatService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=ChatCompletionResponse)
async def create_chat_completion(
    request: ChatCompletionRequest,
    env: ProviderEnvDep,
    load_settings: SettingsLoaderDep,
    user: AuthUser = Depends(get_current_user),
):
    """
    Generate a chat completion.

    The `model` field is a logical role (chat-model, title-model, ...).
    The provider and vendor model are chosen from the admin provider
    settings, falling back to whichever provider is configured.

    For `chat-model-reasoning`, `<think>` blocks are returned separately
    in `reasoning`.
    """
    logger.info(f"Chat completion for user {user.id} with role {request.model.value}")
    return await run_in_threadpool(ChatService.complete, request, env, load_settings)
