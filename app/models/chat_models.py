# app/models/chat_models.py
from typing import Any, Dict, List, Optional

from pydantic import BaseModel


class ChatMessageRequest(BaseModel):
    message: Optional[str] = None
    context: Optional[Dict[str, Any]] = None
    conversationId: Optional[str] = None


class ChatReply(BaseModel):
    success: bool
    message: str
    actions: List[Dict[str, str]] = []
