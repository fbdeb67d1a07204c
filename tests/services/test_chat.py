import httpx
from openai import APIStatusError
from unittest.mock import MagicMock

from llm.providers.base import ChatMessage, ChatProvider, MODEL_ROLE, USER_ROLE
from services.chat import (
    API_STATUS_ERROR,
    BRAND_NAME,
    EMPTY_RESPONSE_ERROR,
    NOT_CONFIGURED_ERROR,
    UNEXPECTED_ERROR,
    ChatService,
    ChatSession,
)


class TestChatService:
    """Tests for ChatService."""

    def test_greeting_mentions_brand(self, services):
        """Test the opening line names the brand."""
        assert BRAND_NAME in services.chat.greeting()

    def test_ask_returns_response(self, services, chat_provider):
        """Test a successful reply is passed through."""
        reply = services.chat.ask([], "How long is shipping?")

        assert reply.ok
        assert reply.response == "Standard shipping takes 3-5 business days."

    def test_ask_forwards_history_and_prompt(self, services, chat_provider):
        """Test the provider gets the system prompt and full conversation."""
        history = [ChatMessage(MODEL_ROLE, "Hello!")]

        services.chat.ask(history, "Do you ship to Canada?")

        system_prompt, messages, max_tokens = chat_provider.reply.call_args[0]
        assert BRAND_NAME in system_prompt
        assert "30-day return policy" in system_prompt
        assert messages == [
            ChatMessage(MODEL_ROLE, "Hello!"),
            ChatMessage(USER_ROLE, "Do you ship to Canada?"),
        ]
        assert max_tokens == 500
        assert history == [ChatMessage(MODEL_ROLE, "Hello!")]

    def test_disabled_provider(self, test_config):
        """Test a disabled LLM reports the missing configuration."""
        reply = ChatService(test_config).ask([], "Hi")

        assert not reply.ok
        assert reply.error == NOT_CONFIGURED_ERROR

    def test_enabled_without_key(self, test_config):
        """Test an enabled LLM without a key reports the missing configuration."""
        test_config.llm_enabled = True

        reply = ChatService(test_config).ask([], "Hi")

        assert reply.error == NOT_CONFIGURED_ERROR

    def test_empty_response(self, test_config):
        """Test an empty provider reply is reported as an error."""
        provider = MagicMock(spec=ChatProvider)
        provider.reply.return_value = None

        reply = ChatService(test_config, provider=provider).ask([], "Hi")

        assert reply.error == EMPTY_RESPONSE_ERROR

    def test_provider_failure(self, test_config):
        """Test a provider exception becomes an error reply."""
        provider = MagicMock(spec=ChatProvider)
        provider.reply.side_effect = RuntimeError("connection reset")

        reply = ChatService(test_config, provider=provider).ask([], "Hi")

        assert reply.error == UNEXPECTED_ERROR

    def test_http_error_status_reported(self, test_config):
        """Test an HTTP error from the API reports its status code."""
        request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
        provider = MagicMock(spec=ChatProvider)
        provider.reply.side_effect = APIStatusError(
            "rate limited", response=httpx.Response(429, request=request), body=None
        )

        reply = ChatService(test_config, provider=provider).ask([], "Hi")

        assert not reply.ok
        assert reply.error == "API request failed with status 429"
        assert reply.error == API_STATUS_ERROR.format(status_code=429)


class TestChatSession:
    """Tests for ChatSession."""

    def test_starts_with_greeting(self, services):
        """Test a new session opens with the bot's greeting."""
        session = ChatSession(services.chat)

        assert len(session.messages) == 1
        assert session.messages[0].role == MODEL_ROLE

    def test_send_records_both_turns(self, services, chat_provider):
        """Test sending adds the user message and the reply."""
        session = ChatSession(services.chat)

        answer = session.send("Shipping time?")

        assert answer.text == "Standard shipping takes 3-5 business days."
        assert [m.role for m in session.messages] == [MODEL_ROLE, USER_ROLE, MODEL_ROLE]
        _, messages, _ = chat_provider.reply.call_args[0]
        assert len(messages) == 2

    def test_blank_input_ignored(self, services, chat_provider):
        """Test whitespace-only input does not call the provider."""
        session = ChatSession(services.chat)

        assert session.send("   ") is None
        assert len(session.messages) == 1
        chat_provider.reply.assert_not_called()

    def test_error_shown_as_apology(self, test_config):
        """Test an error reply is shown to the customer as an apology."""
        session = ChatSession(ChatService(test_config))

        answer = session.send("Hi")

        assert answer.text == f"Sorry, an error occurred: {NOT_CONFIGURED_ERROR}"
