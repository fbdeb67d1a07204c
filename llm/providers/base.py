"""Base provider interface for LLM implementations."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

USER_ROLE = "user"
MODEL_ROLE = "model"


@dataclass
class ChatMessage:
    """One turn of a support conversation."""

    role: str  # USER_ROLE or MODEL_ROLE
    text: str


class ChatProvider(ABC):
    """Abstract base class for chat-capable LLM providers.

    Providers receive the full conversation on every call; no state is kept
    between calls.
    """

    @abstractmethod
    def reply(
        self,
        system_prompt: str,
        messages: List[ChatMessage],
        max_tokens: int,
    ) -> Optional[str]:
        """Generate the assistant's next message.

        Args:
            system_prompt: Persona and store policy instructions.
            messages: Conversation so far, ending with the user's new message.
            max_tokens: Upper bound on the length of the reply.

        Returns:
            The reply text, or None if the provider returned nothing usable.

        Raises:
            Exception: If the LLM API call fails.
        """
        pass
