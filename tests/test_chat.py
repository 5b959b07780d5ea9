# =============================================================================
# tests/test_chat.py - Chat Relay Tests
# =============================================================================
# Covers the OpenAI assistant wrapper, the chat service and POST /chat.
# The OpenAI client is a MagicMock; no network calls are made.
# =============================================================================

import pytest

from agents.chat_assistant import ChatAssistant
from app.exceptions import CompletionUpstreamError
from core.models.chat import EMPTY_MESSAGE_REPLY, FALLBACK_REPLY, ChatStatus
from core.services import ChatService
from tests.conftest import make_completion


# =============================================================================
# ChatAssistant Tests
# =============================================================================

class TestChatAssistant:
    """Tests for the single-turn OpenAI relay."""

    def test_reply_is_stripped(self, assistant):
        assert assistant.reply("Hi") == "Hello from the assistant!"

    def test_sends_only_the_user_message(self, assistant, openai_client):
        assistant.reply("Will it rain?")

        kwargs = openai_client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-3.5-turbo"
        assert kwargs["messages"] == [{"role": "user", "content": "Will it rain?"}]

    def test_api_failure(self, assistant, openai_client):
        openai_client.chat.completions.create.side_effect = RuntimeError("connection reset")

        with pytest.raises(CompletionUpstreamError) as exc_info:
            assistant.reply("Hi")

        assert "connection reset" in exc_info.value.details["error"]
        assert exc_info.value.details["model"] == "gpt-3.5-turbo"

    @pytest.mark.parametrize("content", [None, "", "   \n"])
    def test_unusable_content(self, assistant, openai_client, content):
        openai_client.chat.completions.create.return_value = make_completion(content)

        with pytest.raises(CompletionUpstreamError):
            assistant.reply("Hi")

    def test_no_choices(self, assistant, openai_client):
        completion = make_completion("unused")
        completion.choices = []
        openai_client.chat.completions.create.return_value = completion

        with pytest.raises(CompletionUpstreamError) as exc_info:
            assistant.reply("Hi")

        assert exc_info.value.details["error"] == "Response has no choices"

    def test_from_settings_disables_retries(self, settings):
        assistant = ChatAssistant.from_settings(settings)

        assert assistant.model == settings.OPENAI_MODEL
        assert assistant.client.max_retries == 0

    def test_close(self, assistant, openai_client):
        assistant.close()

        openai_client.close.assert_called_once()

    def test_shutdown_closes_cached_assistant(self):
        from app.dependencies import close_clients, get_chat_assistant

        assistant = get_chat_assistant()
        close_clients()

        assert assistant.client.is_closed()
        assert get_chat_assistant.cache_info().currsize == 0


# =============================================================================
# ChatService Tests
# =============================================================================

class TestChatService:
    """Tests for the relay flow and its fallbacks."""

    @pytest.fixture
    def chats(self, db, assistant):
        return ChatService(db, assistant)

    @pytest.mark.parametrize("message", [None, "", "   "])
    def test_empty_message(self, chats, openai_client, fake_supabase, message):
        result = chats.chat(message)

        assert result.response == EMPTY_MESSAGE_REPLY
        assert result.status == ChatStatus.EMPTY
        openai_client.chat.completions.create.assert_not_called()
        assert fake_supabase.rows("chats") == []

    def test_reply_is_stored(self, chats, fake_supabase):
        result = chats.chat("Hi")

        assert result.response == "Hello from the assistant!"
        assert result.status == ChatStatus.OK
        records = fake_supabase.rows("chats")
        assert len(records) == 1
        assert records[0]["user_message"] == "Hi"
        assert records[0]["bot_message"] == "Hello from the assistant!"

    def test_non_string_message_returns_fallback(self, chats, openai_client):
        result = chats.chat(42)

        assert result.response == FALLBACK_REPLY
        assert result.status == ChatStatus.ERROR
        openai_client.chat.completions.create.assert_not_called()

    def test_upstream_failure_returns_fallback(self, chats, openai_client, fake_supabase):
        openai_client.chat.completions.create.side_effect = TimeoutError("read timed out")

        result = chats.chat("Hi")

        assert result.response == FALLBACK_REPLY
        assert result.status == ChatStatus.ERROR
        assert fake_supabase.rows("chats") == []

    def test_storage_failure_returns_fallback(self, chats, fake_supabase):
        fake_supabase.failing.add("chats")

        result = chats.chat("Hi")

        assert result.response == FALLBACK_REPLY
        assert result.status == ChatStatus.ERROR


# =============================================================================
# Endpoint Tests
# =============================================================================

class TestChatEndpoint:
    """Tests for POST /chat."""

    def test_chat_reply(self, client, fake_supabase):
        response = client.post("/chat", json={"message": "Hi"})

        assert response.status_code == 200
        assert response.json() == {"response": "Hello from the assistant!", "status": "ok"}
        assert len(fake_supabase.rows("chats")) == 1

    def test_chat_needs_no_session(self, client):
        assert client.post("/chat", json={"message": "Hi"}).json()["status"] == "ok"

    @pytest.mark.parametrize("body", [{"message": ""}, {"message": "   "}, {}])
    def test_chat_empty_message(self, client, openai_client, fake_supabase, body):
        response = client.post("/chat", json=body)

        assert response.status_code == 200
        assert response.json() == {"response": "Please type something.", "status": "empty"}
        openai_client.chat.completions.create.assert_not_called()
        assert fake_supabase.rows("chats") == []

    def test_chat_without_body(self, client):
        response = client.post("/chat")

        assert response.status_code == 200
        assert response.json()["status"] == "empty"

    def test_chat_upstream_failure(self, client, openai_client, fake_supabase):
        openai_client.chat.completions.create.side_effect = RuntimeError("401 invalid api key")

        response = client.post("/chat", json={"message": "Hi"})

        assert response.status_code == 200
        assert response.json() == {
            "response": "I'm having trouble thinking right now. Try again later.",
            "status": "error",
        }
        assert fake_supabase.rows("chats") == []

    def test_chat_long_message(self, client, openai_client):
        response = client.post("/chat", json={"message": "x" * 5000})

        assert response.status_code == 200
        assert response.json()["status"] == "ok"
        sent = openai_client.chat.completions.create.call_args.kwargs["messages"][0]["content"]
        assert len(sent) == 5000

    @pytest.mark.parametrize("message", [123, ["Hi"], {"text": "Hi"}, True])
    def test_chat_non_string_message(self, client, openai_client, fake_supabase, message):
        response = client.post("/chat", json={"message": message})

        assert response.status_code == 200
        assert response.json() == {
            "response": "I'm having trouble thinking right now. Try again later.",
            "status": "error",
        }
        openai_client.chat.completions.create.assert_not_called()
        assert fake_supabase.rows("chats") == []
