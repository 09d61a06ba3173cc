# app/services/chat_services.py
import json
import logging
import secrets
import string
import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from google.genai import types
from redis.asyncio import Redis

from app.core.config import settings
from app.core.startup import llm_clients
from app.models.chat_models import ChatReply
from app.models.database_models.user import User

logger = logging.getLogger(__name__)

CONVERSATION_KEY_PREFIX = "chat:conversation:"
MAX_MESSAGE_LENGTH = 500

GENERATION_CONFIG = types.GenerateContentConfig(
    temperature=0.8,
    top_k=30,
    top_p=0.9,
    max_output_tokens=80,
)

ACTION_CATEGORIES = [
    "photography", "digital art", "character", "landscape", "abstract", "product",
    "ai art", "anime", "3d render", "illustration", "coding", "ui/ux", "web design",
    "logo design", "branding", "marketing", "social media", "video", "music", "writing",
]
GREETINGS = ["hi", "hello", "hey", "sup", "yo", "hola", "greetings"]


def build_system_context(user: Optional[User], context: Optional[Dict[str, Any]] = None) -> str:
    lines = [
        "You are Prompty, creative AI assistant for YourPrompty!",
        "",
        "YourPrompty = Platform for sharing AI prompts",
        "",
        "YOUR MAIN JOB - GIVE PROMPT IDEAS!",
        "When user asks for a prompt (photo, art, design, etc), CREATE a creative prompt for them immediately!",
        'Example: "casual photo" -> "Candid lifestyle shot, golden hour lighting, person enjoying coffee '
        'at outdoor cafe, natural smile, warm tones"',
        "Also help with signing up, uploading, browsing YourPrompty, and friendly greetings.",
        "Only refuse: Politics, math, history, news (off-topic stuff).",
        "Keep SHORT (1-2 sentences)!",
        "",
        f"User: {user.name}" if user else "User: Guest",
    ]
    if context:
        lines.append(f"Page context: {json.dumps(context, default=str)[:300]}")
    return "\n".join(lines)


def detect_actions(user_message: str, bot_response: str) -> List[Dict[str, str]]:
    """UI hints for the client, derived from keywords in the exchange."""
    actions = []
    lower_message = user_message.lower()
    lower_response = bot_response.lower()

    for category in ACTION_CATEGORIES:
        if category in lower_message or category in lower_response:
            actions.append({"type": "FILTER_CATEGORY", "category": category[0].upper() + category[1:]})
            break

    if "upload" in lower_message or "create prompt" in lower_message or "share" in lower_message:
        actions.append({"type": "OPEN_UPLOAD"})

    if "sign up" in lower_message or "create account" in lower_message or "register" in lower_message:
        actions.append({"type": "SHOW_AUTH", "mode": "signup"})

    if "sign in" in lower_message or "log in" in lower_message or "login" in lower_message:
        actions.append({"type": "SHOW_AUTH", "mode": "signin"})

    return actions


def get_fallback_response(message: str) -> str:
    lower_message = message.lower().strip()

    if any(
        lower_message == greeting or lower_message.startswith(greeting + " ") or lower_message.endswith(" " + greeting)
        for greeting in GREETINGS
    ):
        return "Hey there! Need prompt ideas or help with YourPrompty?"

    if any(keyword in lower_message for keyword in ("prompt", "photo", "photography", "art", "design", "image")):
        return "I can help with prompt ideas! Try the search or browse our categories for inspiration!"

    if any(keyword in lower_message for keyword in ("sign", "account", "register", "login")):
        return "Click Sign Up in the top right to join!"

    if any(keyword in lower_message for keyword in ("upload", "post", "share")):
        return "Click Upload Prompt in the header!"

    if any(keyword in lower_message for keyword in ("browse", "search", "find")):
        return "Use the search bar or browse categories!"

    return "I help with YourPrompty! Ask for prompt ideas or help using the site!"


def new_conversation_id() -> str:
    alphabet = string.ascii_lowercase + string.digits
    suffix = "".join(secrets.choice(alphabet) for _ in range(9))
    return f"conv_{int(time.time() * 1000)}_{suffix}"


def conversation_key(conversation_id: str) -> str:
    return f"{CONVERSATION_KEY_PREFIX}{conversation_id}"


async def load_history(redis_client: Redis, conversation_id: str) -> List[Dict[str, str]]:
    raw = await redis_client.get(conversation_key(conversation_id))
    if not raw:
        return []
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        logger.warning(f"Discarding unreadable history for conversation {conversation_id}")
        return []


async def save_history(redis_client: Redis, conversation_id: str, history: List[Dict[str, str]]) -> None:
    """Keep only the newest messages; the TTL restarts on every write."""
    trimmed = history[-settings.CHAT_HISTORY_MAX_MESSAGES:]
    await redis_client.set(
        conversation_key(conversation_id),
        json.dumps(trimmed),
        ex=settings.CHAT_CONVERSATION_TTL_SECONDS,
    )


async def clear_conversation(redis_client: Redis, conversation_id: str) -> None:
    await redis_client.delete(conversation_key(conversation_id))


async def count_conversations(redis_client: Redis) -> int:
    count = 0
    async for _ in redis_client.scan_iter(match=f"{CONVERSATION_KEY_PREFIX}*"):
        count += 1
    return count


async def generate_reply(
    message: str,
    user: Optional[User],
    context: Optional[Dict[str, Any]],
    history: List[Dict[str, str]],
) -> ChatReply:
    """Ask Gemini for a reply, falling back to canned answers when it is unavailable."""
    client = llm_clients.get("gemini")
    if client is None:
        return ChatReply(success=False, message=get_fallback_response(message))

    system_context = build_system_context(user, context)
    full_message = (
        f"{system_context}\n\nUser Question: {message}\n\n"
        "Remember: If user asks for prompt ideas/suggestions, GIVE them creative prompts! "
        "If asking about YourPrompty features, help them! Only refuse if completely off-topic."
    )
    contents = [
        types.Content(
            role="user" if entry["role"] == "user" else "model",
            parts=[types.Part(text=entry["content"])],
        )
        for entry in history
    ]

    try:
        chat = client.aio.chats.create(model=settings.GEMINI_MODEL, history=contents, config=GENERATION_CONFIG)
        response = await chat.send_message(full_message)
        text = (response.text or "").strip()
        if not text:
            return ChatReply(success=False, message=get_fallback_response(message))
        return ChatReply(success=True, message=text, actions=detect_actions(message, text))
    except Exception as e:
        logger.error(f"Gemini API error: {e}")
        return ChatReply(success=False, message=get_fallback_response(message))


async def handle_chat_message(
    redis_client: Redis,
    message: str,
    user: Optional[User] = None,
    conversation_id: Optional[str] = None,
    context: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Validate the message, answer it, and append the exchange to the conversation history."""
    if not message or not message.strip():
        raise ValueError("Message is required")
    if len(message) > MAX_MESSAGE_LENGTH:
        raise ValueError(f"Message is too long. Please keep it under {MAX_MESSAGE_LENGTH} characters.")

    conversation_id = conversation_id or new_conversation_id()
    history = await load_history(redis_client, conversation_id)

    reply = await generate_reply(message, user, context, history)

    history.append({"role": "user", "content": message})
    history.append({"role": "assistant", "content": reply.message})
    await save_history(redis_client, conversation_id, history)

    return {
        "success": True,
        "message": reply.message,
        "conversationId": conversation_id,
        "actions": reply.actions,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
