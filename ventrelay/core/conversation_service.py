"""Remote conversation service: the canister that owns sessions and messages.

The transport is shared by every request and holds no session state. Update calls
(newSession, sendMessage) and queries (getSessionHistory, getSession) go through a
JSON gateway in front of the canister:

    POST {host}/api/canister/{canister_id}/call/{method}   body {"args": [...]}
    POST {host}/api/canister/{canister_id}/query/{method}  body {"args": [...]}

The response body is the method's decoded return value.
"""
import logging
from typing import Any, Optional, Protocol

import requests
from pydantic import BaseModel, TypeAdapter, ValidationError

from ventrelay.core.config import get_settings
from ventrelay.core.errors import TransportError
from ventrelay.models.conversation import (
    Message,
    NewSessionResult,
    SendMessageResult,
    Session,
    unwrap_opt,
)

logger = logging.getLogger(__name__)

_MESSAGE_LIST = TypeAdapter(list[Message])

_service = None


class ConversationService(Protocol):
    def new_session(self) -> NewSessionResult: ...

    def send_message(self, session_id: str, text: str) -> SendMessageResult: ...

    def get_session_history(self, session_id: str) -> list[Message]: ...

    def get_session(self, session_id: str) -> Optional[Session]: ...


class HttpConversationService:
    """ConversationService over HTTP. One requests.Session is reused for all calls."""

    def __init__(
        self,
        canister_id: str,
        host: str,
        *,
        timeout: float | None = None,
        http: Optional[requests.Session] = None,
    ):
        self.canister_id = canister_id
        self.host = host.rstrip("/")
        self.timeout = timeout
        self._http = http if http is not None else requests.Session()
        self._http.headers.update({"Content-Type": "application/json", "Accept": "application/json"})

    def _url(self, kind: str, method: str) -> str:
        return f"{self.host}/api/canister/{self.canister_id}/{kind}/{method}"

    def _invoke(self, kind: str, method: str, *args: Any) -> Any:
        url = self._url(kind, method)
        try:
            resp = self._http.post(url, json={"args": list(args)}, timeout=self.timeout)
            resp.raise_for_status()
            return resp.json()
        except requests.RequestException as e:
            logger.warning("Canister %s %s failed: %s", kind, method, e)
            raise TransportError() from e
        except ValueError as e:
            logger.warning("Canister %s %s returned invalid JSON: %s", kind, method, e)
            raise TransportError() from e

    @staticmethod
    def _decode(model: type[BaseModel], payload: Any, method: str) -> Any:
        try:
            return model.model_validate(payload)
        except ValidationError as e:
            logger.warning("Canister %s returned an unexpected shape: %s", method, e)
            raise TransportError() from e

    def new_session(self) -> NewSessionResult:
        return self._decode(NewSessionResult, self._invoke("call", "newSession"), "newSession")

    def send_message(self, session_id: str, text: str) -> SendMessageResult:
        payload = self._invoke("call", "sendMessage", session_id, text)
        return self._decode(SendMessageResult, payload, "sendMessage")

    def get_session_history(self, session_id: str) -> list[Message]:
        payload = self._invoke("query", "getSessionHistory", session_id)
        try:
            return _MESSAGE_LIST.validate_python(payload)
        except ValidationError as e:
            logger.warning("Canister getSessionHistory returned an unexpected shape: %s", e)
            raise TransportError() from e

    def get_session(self, session_id: str) -> Optional[Session]:
        payload = unwrap_opt(self._invoke("query", "getSession", session_id))
        if payload is None:
            return None
        return self._decode(Session, payload, "getSession")

    def close(self) -> None:
        self._http.close()


def get_conversation_service() -> ConversationService:
    """Return the shared transport, creating it on first use."""
    global _service
    if _service is not None:
        return _service
    settings = get_settings()
    _service = HttpConversationService(
        settings.canister_id,
        settings.icp_host,
        timeout=settings.backend_timeout_seconds,
    )
    logger.info("Conversation service ready (canister=%s, host=%s).", settings.canister_id, settings.icp_host)
    return _service


def reset_conversation_service() -> None:
    """Drop the shared transport (closes its HTTP session). The next get_conversation_service() rebuilds it."""
    global _service
    if _service is not None and hasattr(_service, "close"):
        _service.close()
    _service = None
