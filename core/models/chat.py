# =============================================================================
# core/models/chat.py - Chat Relay Schemas
# =============================================================================
# These models define the API contract for the chat relay:
# - ChatRequest: the user's message
# - ChatResponse: reply text plus an explicit status
# - ChatRecord: one persisted exchange
#
# POST /chat always answers 200. `status` tells a real reply ("ok") apart
# from the canned prompt for empty input ("empty") and the canned apology
# used when the completion API fails ("error").
# =============================================================================

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


# Canned replies
EMPTY_MESSAGE_REPLY = "Please type something."
FALLBACK_REPLY = "I'm having trouble thinking right now. Try again later."


class ChatStatus(str, Enum):
    """
    Outcome of a chat turn.

    - ok: reply came from the completion API and was stored
    - empty: no message was sent, canned prompt returned
    - error: the completion API (or storing the exchange) failed,
             canned apology returned
    """
    OK = "ok"
    EMPTY = "empty"
    ERROR = "error"


class ChatRequest(BaseModel):
    """
    Schema for sending a chat message.

    Example:
        {"message": "Will it rain in London tomorrow?"}
    """
    message: Any = Field(
        default=None,
        description="User's message. Non-string values get the fallback reply."
    )


class ChatResponse(BaseModel):
    response: str
    status: ChatStatus = ChatStatus.OK


class ChatRecord(BaseModel):
    """One stored (prompt, reply) pair."""
    id: str
    user_message: str
    bot_message: str
    created_at: datetime | None = None

    @classmethod
    def from_db_row(cls, row: dict[str, Any]) -> "ChatRecord":
        return cls(
            id=str(row["id"]),
            user_message=row["user_message"],
            bot_message=row["bot_message"],
            created_at=row.get("created_at"),
        )
