from unittest.mock import patch


def test_message_without_text_is_400(client, redis_override):
    response = client.post("/api/chat/message", json={"message": ""})

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Message is required"}


def test_guest_message_gets_fallback_reply(client, redis_override):
    with patch.dict("app.services.chat_services.llm_clients", {}, clear=True):
        response = client.post("/api/chat/message", json={"message": "hello"})

    body = response.json()
    assert response.status_code == 200
    assert body["success"] is True
    assert body["conversationId"].startswith("conv_")
    redis_override.set.assert_awaited_once()


def test_clear_conversation(client, redis_override):
    response = client.delete("/api/chat/conversation/conv_1")

    assert response.json() == {"success": True, "message": "Conversation cleared"}
    redis_override.delete.assert_awaited_once_with("chat:conversation:conv_1")
