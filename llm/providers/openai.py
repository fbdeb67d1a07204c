"""OpenAI provider implementation using structured outputs."""

from typing import List, Optional
from pydantic import BaseModel
from openai import OpenAI
from llm.providers.base import ChatProvider, ChatMessage, MODEL_ROLE
from logger import get_logger

logger = get_logger()

DEFAULT_MODEL = "gpt-4o-mini"


class SupportReply(BaseModel):
    """Structured reply from the support assistant."""

    reply: str


class OpenAIProvider(ChatProvider):
    """OpenAI implementation using structured outputs for reliable parsing."""

    def __init__(self, api_key: str, model: Optional[str] = None, client=None):
        """Initialize OpenAI provider.

        Args:
            api_key: OpenAI API key.
            model: Model to use (e.g., "gpt-4o-mini"). If None, uses DEFAULT_MODEL.
            client: Optional pre-built client, used by tests.
        """
        self.client = client or OpenAI(api_key=api_key)
        self.model = model or DEFAULT_MODEL

    def reply(
        self,
        system_prompt: str,
        messages: List[ChatMessage],
        max_tokens: int,
    ) -> Optional[str]:
        """Generate the next support reply with OpenAI.

        Raises:
            Exception: If OpenAI API call fails.
        """
        logger.info(
            f"Calling OpenAI ({self.model}) with {len(messages)} message(s) of history"
        )

        try:
            response = self.client.beta.chat.completions.parse(
                model=self.model,
                messages=[{"role": "system", "content": system_prompt}]
                + [self._to_openai_message(m) for m in messages],
                max_tokens=max_tokens,
                response_format=SupportReply,
            )
        except Exception as e:
            logger.error(f"OpenAI API error: {e}")
            raise

        result = response.choices[0].message.parsed
        if result is None or not result.reply.strip():
            logger.warning("OpenAI returned an empty reply")
            return None

        return result.reply

    def _to_openai_message(self, message: ChatMessage) -> dict:
        # OpenAI names the model's turns "assistant"
        role = "assistant" if message.role == MODEL_ROLE else "user"
        return {"role": role, "content": message.text}
