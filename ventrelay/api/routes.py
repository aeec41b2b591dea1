"""FastAPI routes for the chat UI."""
import logging

from fastapi import APIRouter, HTTPException, Query

from ventrelay.api.chat_handler import load_chat_history, load_session, post_chat_message
from ventrelay.core.conversation_service import get_conversation_service
from ventrelay.models.conversation import Session
from ventrelay.models.schemas import ChatHistoryResponse, ChatRequest, ChatResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["chat"])

# Fixed client-facing failure texts; the real error only goes to the log
CHAT_ERROR = "An error occurred while processing your message"
HISTORY_ERROR = "Failed to load chat history"
SESSION_ERROR = "Failed to load session"


@router.post("/chat", response_model=ChatResponse)
def chat(req: ChatRequest) -> ChatResponse:
    """Send the last user message and get the backend reply. Pass sessionId to continue a conversation."""
    try:
        return post_chat_message(get_conversation_service(), req)
    except Exception:
        logger.exception("Error in chat API (session=%s)", req.session_id)
        raise HTTPException(status_code=500, detail=CHAT_ERROR)


@router.get("/chat", response_model=ChatHistoryResponse)
def chat_history(session_id: str = Query("", alias="sessionId")) -> ChatHistoryResponse:
    """Previous messages of a session. Without sessionId a new session is started."""
    try:
        return load_chat_history(get_conversation_service(), session_id.strip() or None)
    except Exception:
        logger.exception("Error fetching chat history (session=%s)", session_id)
        raise HTTPException(status_code=500, detail=HISTORY_ERROR)


@router.get("/sessions/{session_id}", response_model=Session)
def session_snapshot(session_id: str) -> Session:
    """Backend view of a session, including dominantEmotion and lastActive."""
    try:
        session = load_session(get_conversation_service(), session_id)
    except Exception:
        logger.exception("Error fetching session %s", session_id)
        raise HTTPException(status_code=500, detail=SESSION_ERROR)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


@router.get("/health")
def health() -> dict:
    """Health check."""
    return {"status": "ok"}
