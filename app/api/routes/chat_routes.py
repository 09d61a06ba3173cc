# app/api/routes/chat_routes.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse
from redis.asyncio import Redis

from app.core.config import settings
from app.core.dependencies import get_redis_client
from app.core.security import limiter
from app.models.chat_models import ChatMessageRequest
from app.models.database_models.user import User
from app.services.auth_services import get_optional_user
from app.services.chat_services import (
    clear_conversation,
    count_conversations,
    handle_chat_message,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Chat"])


@router.post("/message")
@limiter.limit(settings.CHAT_RATE_LIMIT)
async def message(
    request: Request,
    chat_request: ChatMessageRequest,
    redis_client: Redis = Depends(get_redis_client),
    user: Optional[User] = Depends(get_optional_user),
):
    """
    Answer a chat message. Works for guests and signed-in users; the
    conversation id is generated on the first message and must be sent back
    on follow-ups to keep the history.
    """
    try:
        return await handle_chat_message(
            redis_client,
            chat_request.message or "",
            user=user,
            conversation_id=chat_request.conversationId,
            context=chat_request.context,
        )
    except ValueError as e:
        return JSONResponse(status_code=400, content={"success": False, "error": str(e)})
    except Exception:
        logger.exception("Chat endpoint error")
        raise HTTPException(status_code=500, detail="Sorry, I encountered an error. Please try again!")


@router.delete("/conversation/{conversation_id}")
async def delete_conversation(conversation_id: str, redis_client: Redis = Depends(get_redis_client)):
    try:
        await clear_conversation(redis_client, conversation_id)
    except Exception:
        logger.exception("Error clearing conversation")
        raise HTTPException(status_code=500, detail="Failed to clear conversation")
    return {"success": True, "message": "Conversation cleared"}


@router.get("/health")
async def health(redis_client: Redis = Depends(get_redis_client)):
    try:
        active = await count_conversations(redis_client)
    except Exception:
        logger.exception("Error counting conversations")
        raise HTTPException(status_code=500, detail="Chat store unavailable")
    return {
        "success": True,
        "status": "Chatbot is running!",
        "geminiConfigured": settings.gemini_configured,
        "conversationsActive": active,
    }
