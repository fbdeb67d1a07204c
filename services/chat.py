"""Support chatbot service.

Forwards the conversation and a fixed system prompt to the configured LLM
provider. Failures are returned as an error string on the reply, not raised.
"""

from dataclasses import dataclass
from typing import List, Optional
from openai import APIStatusError
from config import Config
from llm import get_llm_provider
from llm.prompts.loader import PromptManager
from llm.providers.base import ChatMessage, ChatProvider, MODEL_ROLE, USER_ROLE
from logger import get_logger

logger = get_logger()

BRAND_NAME = "Éclat Lingerie Fine"
PROMPT_NAME = "support_chat"
DEFAULT_MAX_OUTPUT_TOKENS = 500

NOT_CONFIGURED_ERROR = "API key is not configured."
EMPTY_RESPONSE_ERROR = "Received an empty response from the AI."
UNEXPECTED_ERROR = "An unexpected error occurred."
API_STATUS_ERROR = "API request failed with status {status_code}"


@dataclass
class ChatReply:
    """Outcome of one chat turn: either a response or an error."""

    response: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ChatService:
    """Service that answers customer support questions.

    Args:
        config: Application configuration, used to build the provider.
        provider: Optional provider override. When omitted the provider is
            created from config on first use.
        prompt_manager: Optional prompt manager override.
    """

    def __init__(
        self,
        config: Config,
        provider: Optional[ChatProvider] = None,
        prompt_manager: Optional[PromptManager] = None,
    ):
        self.config = config
        self._provider = provider
        self.prompt_manager = prompt_manager or PromptManager()

    def greeting(self) -> str:
        """Opening message shown before the customer types anything."""
        return self._render()["greeting"]

    def ask(self, history: List[ChatMessage], new_message: str) -> ChatReply:
        """Send the conversation plus a new user message to the LLM.

        Args:
            history: Earlier turns, oldest first. Not modified.
            new_message: The customer's new message.

        Returns:
            ChatReply with the response text, or with an error message.
        """
        try:
            provider = self._get_provider()
        except ValueError as e:
            logger.error(f"Failed to initialize LLM provider: {e}")
            return ChatReply(error=NOT_CONFIGURED_ERROR)

        if provider is None:
            return ChatReply(error=NOT_CONFIGURED_ERROR)

        rendered = self._render()
        max_tokens = rendered["parameters"].get(
            "max_output_tokens", DEFAULT_MAX_OUTPUT_TOKENS
        )
        messages = list(history) + [ChatMessage(role=USER_ROLE, text=new_message)]

        try:
            response = provider.reply(rendered["system_prompt"], messages, max_tokens)
        except APIStatusError as e:
            logger.error(f"Support chat request failed with status {e.status_code}: {e}")
            return ChatReply(error=API_STATUS_ERROR.format(status_code=e.status_code))
        except Exception as e:
            logger.error(f"Support chat request failed: {e}")
            return ChatReply(error=UNEXPECTED_ERROR)

        if not response:
            return ChatReply(error=EMPTY_RESPONSE_ERROR)

        return ChatReply(response=response)

    def _get_provider(self) -> Optional[ChatProvider]:
        if self._provider is None:
            self._provider = get_llm_provider(self.config)
        return self._provider

    def _render(self) -> dict:
        return self.prompt_manager.render_prompt(PROMPT_NAME, {"brand_name": BRAND_NAME})


class ChatSession:
    """A single customer's conversation with the support bot.

    The session starts with the bot's greeting. Each exchange appends the
    user's message and either the reply or an apology carrying the error.
    """

    def __init__(self, chat_service: ChatService):
        self.chat_service = chat_service
        self.messages: List[ChatMessage] = [
            ChatMessage(role=MODEL_ROLE, text=chat_service.greeting())
        ]

    def send(self, text: str) -> Optional[ChatMessage]:
        """Send a message and record the bot's answer.

        Blank input is ignored.

        Returns:
            The bot's message, or None if the input was blank.
        """
        if not text.strip():
            return None

        history = list(self.messages)
        self.messages.append(ChatMessage(role=USER_ROLE, text=text))

        reply = self.chat_service.ask(history, text)
        if reply.ok:
            answer = ChatMessage(role=MODEL_ROLE, text=reply.response)
        else:
            answer = ChatMessage(
                role=MODEL_ROLE, text=f"Sorry, an error occurred: {reply.error}"
            )

        self.messages.append(answer)
        return answer
