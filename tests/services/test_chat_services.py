"""
Tests for the chat assistant.

Gemini is never configured in tests, so replies come from the canned
fallback unless a fake client is placed in llm_clients.
"""
import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from app.core.config import settings
from app.services.chat_services import (
    conversation_key,
    detect_actions,
    get_fallback_response,
    handle_chat_message,
    load_history,
    new_conversation_id,
    save_history,
)


@pytest.fixture
def redis_client():
    client = MagicMock()
    client.get = AsyncMock(return_value=None)
    client.set = AsyncMock()
    client.delete = AsyncMock()
    return client


def test_fallback_greeting():
    assert get_fallback_response("hello") == "Hey there! Need prompt ideas or help with YourPrompty?"


def test_fallback_prompt_question():
    assert "prompt ideas" in get_fallback_response("Any photo ideas?")


def test_fallback_default():
    assert get_fallback_response("what is the weather") == (
        "I help with YourPrompty! Ask for prompt ideas or help using the site!"
    )


def test_detect_actions_category_and_upload():
    actions = detect_actions("I want to upload an anime prompt", "Sure!")

    assert {"type": "FILTER_CATEGORY", "category": "Anime"} in actions
    assert {"type": "OPEN_UPLOAD"} in actions


def test_detect_actions_auth_modes():
    assert detect_actions("how do I sign up", "") == [{"type": "SHOW_AUTH", "mode": "signup"}]
    assert detect_actions("I can't log in", "") == [{"type": "SHOW_AUTH", "mode": "signin"}]


def test_conversation_id_format():
    conversation_id = new_conversation_id()

    prefix, millis, suffix = conversation_id.split("_")
    assert prefix == "conv"
    assert millis.isdigit()
    assert len(suffix) == 9


@pytest.mark.asyncio
async def test_save_history_trims_and_sets_ttl(redis_client):
    history = [{"role": "user", "content": str(i)} for i in range(settings.CHAT_HISTORY_MAX_MESSAGES + 5)]

    await save_history(redis_client, "conv_1", history)

    key, payload = redis_client.set.await_args.args
    assert key == conversation_key("conv_1")
    stored = json.loads(payload)
    assert len(stored) == settings.CHAT_HISTORY_MAX_MESSAGES
    assert stored[-1] == history[-1]
    assert redis_client.set.await_args.kwargs["ex"] == settings.CHAT_CONVERSATION_TTL_SECONDS


@pytest.mark.asyncio
async def test_load_history_ignores_corrupt_payload(redis_client):
    redis_client.get.return_value = "not json"

    assert await load_history(redis_client, "conv_1") == []


@pytest.mark.asyncio
async def test_empty_message_is_rejected(redis_client):
    with pytest.raises(ValueError, match="Message is required"):
        await handle_chat_message(redis_client, "   ")


@pytest.mark.asyncio
async def test_long_message_is_rejected(redis_client):
    with pytest.raises(ValueError, match="too long"):
        await handle_chat_message(redis_client, "x" * 501)


@pytest.mark.asyncio
async def test_message_without_gemini_uses_fallback_and_saves_exchange(redis_client):
    with patch.dict("app.services.chat_services.llm_clients", {}, clear=True):
        reply = await handle_chat_message(redis_client, "hello", conversation_id="conv_1")

    assert reply["success"] is True
    assert reply["conversationId"] == "conv_1"
    assert reply["message"] == get_fallback_response("hello")
    stored = json.loads(redis_client.set.await_args.args[1])
    assert [entry["role"] for entry in stored] == ["user", "assistant"]


@pytest.mark.asyncio
async def test_message_with_gemini_passes_history(redis_client):
    redis_client.get.return_value = json.dumps([
        {"role": "user", "content": "hi"},
        {"role": "assistant", "content": "Hey!"},
    ])
    chat = MagicMock()
    chat.send_message = AsyncMock(return_value=MagicMock(text="Neon city at dusk, anime style"))
    client = MagicMock()
    client.aio.chats.create.return_value = chat

    with patch.dict("app.services.chat_services.llm_clients", {"gemini": client}, clear=True):
        reply = await handle_chat_message(redis_client, "anime prompt idea?", conversation_id="conv_2")

    assert reply["message"] == "Neon city at dusk, anime style"
    assert {"type": "FILTER_CATEGORY", "category": "Anime"} in reply["actions"]
    history = client.aio.chats.create.call_args.kwargs["history"]
    assert [content.role for content in history] == ["user", "model"]


@pytest.mark.asyncio
async def test_gemini_failure_falls_back(redis_client):
    chat = MagicMock()
    chat.send_message = AsyncMock(side_effect=RuntimeError("quota"))
    client = MagicMock()
    client.aio.chats.create.return_value = chat

    with patch.dict("app.services.chat_services.llm_clients", {"gemini": client}, clear=True):
        reply = await handle_chat_message(redis_client, "sign up help", conversation_id="conv_3")

    assert reply["message"] == get_fallback_response("sign up help")
