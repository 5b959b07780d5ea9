# =============================================================================
# core/services/chat_service.py - Chat Relay
# =============================================================================
# Flow for a non-empty message:
# 1. Ask the assistant for a reply
# 2. Store (message, reply) in the chats table
# 3. Return the reply
#
# Failures in steps 1-2 are not propagated to the client. The caller gets
# the canned apology with status "error" and HTTP 200. A message that is not
# a string gets the same apology.
#
# Chat records are not linked to a user.
# =============================================================================

import logging
from typing import Any

from agents.chat_assistant import ChatAssistant
from app.exceptions import WeatherChatException
from core.models.chat import (
    EMPTY_MESSAGE_REPLY,
    FALLBACK_REPLY,
    ChatRecord,
    ChatResponse,
    ChatStatus,
)
from lib.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)


class ChatService:
    """Relays one message to the assistant and logs the exchange."""

    def __init__(self, db: SupabaseClient, assistant: ChatAssistant):
        self.db = db
        self.assistant = assistant

    def chat(self, message: Any) -> ChatResponse:
        if not message or (isinstance(message, str) and not message.strip()):
            return ChatResponse(response=EMPTY_MESSAGE_REPLY, status=ChatStatus.EMPTY)

        if not isinstance(message, str):
            logger.warning(f"Chat message of type {type(message).__name__} rejected, sending fallback reply")
            return ChatResponse(response=FALLBACK_REPLY, status=ChatStatus.ERROR)

        try:
            reply = self.assistant.reply(message)
            record = ChatRecord.from_db_row(
                self.db.insert_chat(user_message=message, bot_message=reply)
            )
        except WeatherChatException as e:
            logger.warning(f"Chat relay failed, sending fallback reply: [{e.code}] {e.message}")
            return ChatResponse(response=FALLBACK_REPLY, status=ChatStatus.ERROR)

        logger.debug(f"Stored chat {record.id}")
        return ChatResponse(response=record.bot_message, status=ChatStatus.OK)
