# =============================================================================
# app/routers/chat.py - Chat Relay Endpoint
# =============================================================================
# POST /chat always answers 200. Check `status` in the body to tell a real
# reply from a canned one.
# =============================================================================

from fastapi import APIRouter

from app.dependencies import ChatServiceDep
from core.models.chat import ChatRequest, ChatResponse

router = APIRouter()


@router.post("/chat", response_model=ChatResponse)
def chat(chats: ChatServiceDep, request: ChatRequest | None = None) -> ChatResponse:
    """
    Send a message to the assistant.

    Returns:
        - status "ok": the assistant's reply (the exchange is stored)
        - status "empty": "Please type something." for a blank message
        - status "error": a canned apology when the assistant is unavailable
    """
    return chats.chat(request.message if request else None)
