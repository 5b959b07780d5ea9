# =============================================================================
# agents/ - AI Assistant
# =============================================================================
# This package wraps the completion API behind the chat relay:
# - chat_assistant.py: single-turn OpenAI chat completions
# =============================================================================

from agents.chat_assistant import ChatAssistant

__all__ = [
    "ChatAssistant",
]
