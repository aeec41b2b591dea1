"""Chat request handling: turns UI payloads into relay calls and relay results into UI messages.

Each call opens its own relay handle, so the session pointer never outlives the request.
Relay errors propagate; the route layer turns them into a generic 500.
"""
import logging
from typing import Optional

from ventrelay.core.conversation_service import ConversationService
from ventrelay.core.relay_client import open_relay
from ventrelay.models.conversation import Message, Session
from ventrelay.models.schemas import ChatHistoryResponse, ChatMessage, ChatRequest, ChatResponse

logger = logging.getLogger(__name__)


def to_chat_message(message: Message) -> ChatMessage:
    return ChatMessage(
        id=str(message.timestamp),
        role="user" if message.is_user else "assistant",
        content=message.text,
    )


def post_chat_message(service: ConversationService, req: ChatRequest) -> ChatResponse:
    """Continue req.session_id (or start a session) and send the last message in req.messages."""
    relay = open_relay(service, logger=logger)
    if req.session_id:
        relay.set_session_id(req.session_id)
    else:
        relay.create_session()

    last = req.messages[-1]
    reply = relay.send_message(last.content)
    return ChatResponse(response=reply.text, session_id=relay.get_session_id())


def load_chat_history(service: ConversationService, session_id: Optional[str]) -> ChatHistoryResponse:
    """History of session_id in UI shape. No id means a fresh session with no messages."""
    relay = open_relay(service, logger=logger)
    if not session_id:
        new_id = relay.create_session()
        return ChatHistoryResponse(messages=[], session_id=new_id)

    relay.set_session_id(session_id)
    messages = [to_chat_message(m) for m in relay.get_session_history()]
    return ChatHistoryResponse(messages=messages, session_id=session_id)


def load_session(service: ConversationService, session_id: str) -> Optional[Session]:
    return open_relay(service, session_id, logger=logger).get_session()
