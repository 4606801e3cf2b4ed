"""API endpoint for chatting with the resume agent."""

import asyncio
import logging

from fastapi import APIRouter, HTTPException

from resume_agent.core import agent
from resume_agent.core.errors import ProviderError
from resume_agent.core.logging import get_logger, log_with_context
from resume_agent.core.schemas_agent import AgentRequest, AgentResponse

logger = get_logger(__name__)

router = APIRouter()


@router.post("/agent", response_model=AgentResponse, response_model_exclude_none=True)
async def chat_with_agent(request: AgentRequest) -> AgentResponse:
    """
    Start a new conversation or continue an existing one.

    Body: { message: string, conversationId?: string }

    Raises:
        HTTPException 400: If message is missing or not text
        HTTPException 500: If the agent call fails or no conversation id comes back
    """
    message = request.message
    if not isinstance(message, str) or not message:
        raise HTTPException(status_code=400, detail="Message is required")

    try:
        if request.conversation_id:
            turn = await asyncio.to_thread(
                agent.continue_conversation, request.conversation_id, message
            )
        else:
            turn = await asyncio.to_thread(agent.start_conversation, message)
    except ProviderError as e:
        logger.error(f"Agent request failed: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to process request: {e}") from e

    if not turn.conversation_id:
        raise HTTPException(status_code=500, detail="Conversation ID missing from response")

    log_with_context(
        logger,
        logging.INFO,
        "Agent turn completed",
        conversation_id=turn.conversation_id,
        tool_used=turn.tool_used,
        has_image=turn.image_url is not None,
    )

    return AgentResponse(
        conversation_id=turn.conversation_id,
        content=turn.content or agent.FALLBACK_REPLY,
        image_url=turn.image_url,
        tool_used=turn.tool_used,
    )
