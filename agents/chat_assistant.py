# =============================================================================
# agents/chat_assistant.py - Chat Assistant
# =============================================================================
# Sends one user message to the OpenAI chat completions API and returns the
# reply text. Single turn: no system prompt, no history.
#
# Every failure (network, auth, rate limit, malformed response) surfaces as
# CompletionUpstreamError so callers only need to handle one exception type.
#
# Usage:
#   from agents.chat_assistant import ChatAssistant
#   assistant = ChatAssistant.from_settings(settings)
#   reply = assistant.reply("What should I wear in London today?")
# =============================================================================

from __future__ import annotations

import logging

from openai import OpenAI

from app.config import Settings
from app.exceptions import CompletionUpstreamError

# Set up logging for this module
logger = logging.getLogger(__name__)


class ChatAssistant:
    """
    Single-turn relay to the OpenAI chat completions API.

    Attributes:
        client: OpenAI client (injectable for tests)
        model: Model ID used for every request
    """

    def __init__(self, client: OpenAI, model: str = "gpt-3.5-turbo"):
        self.client = client
        self.model = model

    @classmethod
    def from_settings(cls, settings: Settings) -> ChatAssistant:
        """Build an assistant with its own OpenAI client. Retries are disabled."""
        client = OpenAI(
            api_key=settings.OPENAI_API_KEY,
            timeout=settings.UPSTREAM_TIMEOUT_SECONDS,
            max_retries=0,
        )
        return cls(client=client, model=settings.OPENAI_MODEL)

    def reply(self, user_message: str) -> str:
        """
        Get the assistant's reply to a single message.

        Args:
            user_message: Non-empty text from the user

        Returns:
            Reply text with surrounding whitespace removed

        Raises:
            CompletionUpstreamError: If the API call fails or the response
                has no usable text
        """
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": user_message}],
            )
        except Exception as e:
            logger.warning(f"OpenAI API call failed: {type(e).__name__}: {e}")
            raise CompletionUpstreamError(f"OpenAI API call failed: {e}", model=self.model)

        if not response or not getattr(response, "choices", None):
            raise CompletionUpstreamError("Response has no choices", model=self.model)

        message = getattr(response.choices[0], "message", None)
        content = getattr(message, "content", None)
        if not isinstance(content, str) or not content.strip():
            raise CompletionUpstreamError("Response has no text content", model=self.model)

        reply = content.strip()
        logger.debug(f"OpenAI reply: {reply[:200]}...")
        return reply

    def close(self) -> None:
        self.client.close()
