"""
Session relay: a session-pointer API over the stateless conversation service.

A SessionRelayClient is a cheap per-request handle. It owns one "current session id"
pointer; the transport behind it is shared and never holds session state, so
concurrent requests cannot move each other's pointer.

Error policy: create/send raise typed RelayErrors (the user's action must not vanish),
history and session lookups degrade to an empty result (the UI can render nothing).
"""
import logging
from typing import Optional

from ventrelay.core.conversation_service import ConversationService
from ventrelay.core.errors import MessageSendError, NoActiveSessionError, SessionCreationError
from ventrelay.models.conversation import Message, Session


class SessionRelayClient:
    def __init__(
        self,
        service: ConversationService,
        session_id: Optional[str] = None,
        *,
        logger: Optional[logging.Logger] = None,
    ):
        self._service = service
        self._session_id = session_id
        self._log = logger or logging.getLogger(__name__)

    def create_session(self) -> str:
        """Ask the backend for a new session and make it the current one."""
        try:
            result = self._service.new_session()
        except Exception as e:
            self._log.error("Failed to create session: %s", e)
            raise SessionCreationError() from e
        if result.is_error:
            self._log.error("Failed to create session: %s", result.error)
            raise SessionCreationError()
        self._session_id = result.success
        return self._session_id

    def send_message(self, content: str) -> Message:
        """Send content in the current session and return the backend's reply as-is."""
        if not self._session_id:
            raise NoActiveSessionError()
        try:
            result = self._service.send_message(self._session_id, content)
        except Exception as e:
            self._log.error("Failed to send message (session=%s): %s", self._session_id, e)
            raise MessageSendError() from e
        if result.is_error:
            self._log.error("Failed to send message (session=%s): %s", self._session_id, result.error)
            raise MessageSendError()
        return result.success

    def get_session_history(self) -> list[Message]:
        """Messages of the current session in backend order; [] when there is none or the lookup fails."""
        if not self._session_id:
            return []
        try:
            return list(self._service.get_session_history(self._session_id))
        except Exception as e:
            self._log.warning("Failed to get session history (session=%s): %s", self._session_id, e)
            return []

    def get_session(self) -> Optional[Session]:
        """Backend snapshot of the current session, or None."""
        if not self._session_id:
            return None
        try:
            return self._service.get_session(self._session_id)
        except Exception as e:
            self._log.warning("Failed to get session (session=%s): %s", self._session_id, e)
            return None

    def get_session_id(self) -> Optional[str]:
        return self._session_id

    def set_session_id(self, session_id: str) -> None:
        # Not validated here; a bad id shows up on the next send/history call.
        self._session_id = session_id


def open_relay(
    service: ConversationService,
    session_id: Optional[str] = None,
    logger: Optional[logging.Logger] = None,
) -> SessionRelayClient:
    """New relay handle for one request, optionally resuming session_id."""
    return SessionRelayClient(service, session_id or None, logger=logger)
