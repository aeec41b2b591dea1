import logging

import pytest

from ventrelay.core.errors import (
    MessageSendError,
    NoActiveSessionError,
    SessionCreationError,
    TransportError,
)
from ventrelay.core.relay_client import SessionRelayClient, open_relay
from ventrelay.models.conversation import Message, NewSessionResult, SendMessageResult, Session


def test_send_without_session_fails_and_skips_backend(service):
    relay = SessionRelayClient(service)

    with pytest.raises(NoActiveSessionError):
        relay.send_message("hello")

    assert service.method_calls == []


def test_create_session_sets_pointer(service):
    service.new_session.return_value = NewSessionResult(success="sess-1")
    relay = SessionRelayClient(service)

    assert relay.create_session() == "sess-1"
    assert relay.get_session_id() == "sess-1"
    service.new_session.assert_called_once_with()


def test_send_after_create_targets_new_session(service):
    service.new_session.return_value = NewSessionResult(success="sess-1")
    service.send_message.return_value = SendMessageResult(
        success=Message(text="ok", timestamp=7, is_user=False)
    )
    relay = SessionRelayClient(service)
    relay.create_session()

    relay.send_message("hello")

    service.send_message.assert_called_once_with("sess-1", "hello")


def test_send_returns_backend_message_unchanged(service):
    reply = Message(text="hi back", timestamp=42, is_user=False)
    service.send_message.return_value = SendMessageResult(success=reply)
    relay = SessionRelayClient(service, "sess-1")

    result = relay.send_message("hello")

    assert result == Message(text="hi back", timestamp=42, is_user=False)


def test_send_error_result_raises_and_keeps_pointer(service):
    service.send_message.return_value = SendMessageResult(error="canister trapped")
    relay = SessionRelayClient(service, "sess-1")

    with pytest.raises(MessageSendError) as exc_info:
        relay.send_message("hello")

    assert "canister trapped" not in str(exc_info.value)
    assert relay.get_session_id() == "sess-1"


def test_send_transport_failure_raises_message_send_error(service):
    service.send_message.side_effect = TransportError()
    relay = SessionRelayClient(service, "sess-1")

    with pytest.raises(MessageSendError) as exc_info:
        relay.send_message("hello")

    assert isinstance(exc_info.value.__cause__, TransportError)
    assert relay.get_session_id() == "sess-1"


def test_create_error_result_raises_and_leaves_pointer(service):
    service.new_session.return_value = NewSessionResult(error="quota exceeded")
    relay = SessionRelayClient(service, "old")

    with pytest.raises(SessionCreationError) as exc_info:
        relay.create_session()

    assert str(exc_info.value) == "Could not start a new session. Please try again later."
    assert relay.get_session_id() == "old"


def test_create_transport_failure_raises_session_creation_error(service):
    service.new_session.side_effect = ConnectionError("unreachable")
    relay = SessionRelayClient(service)

    with pytest.raises(SessionCreationError):
        relay.create_session()

    assert relay.get_session_id() is None


def test_backend_error_text_is_logged(service, caplog):
    service.new_session.return_value = NewSessionResult(error="quota exceeded")
    relay = SessionRelayClient(service, logger=logging.getLogger("tests.relay"))

    with caplog.at_level(logging.ERROR, logger="tests.relay"):
        with pytest.raises(SessionCreationError):
            relay.create_session()

    assert "quota exceeded" in caplog.text


def test_history_without_session_is_empty_and_skips_backend(service):
    relay = SessionRelayClient(service)

    assert relay.get_session_history() == []
    service.get_session_history.assert_not_called()


def test_history_keeps_backend_order(service):
    history = [
        Message(text="b", timestamp=3, is_user=True),
        Message(text="a", timestamp=3, is_user=False),
        Message(text="c", timestamp=8, is_user=True),
    ]
    service.get_session_history.return_value = history
    relay = SessionRelayClient(service, "sess-1")

    assert relay.get_session_history() == history
    service.get_session_history.assert_called_once_with("sess-1")


@pytest.mark.parametrize("failure", [TransportError(), RuntimeError("boom")])
def test_history_failure_degrades_to_empty(service, failure):
    service.get_session_history.side_effect = failure
    relay = SessionRelayClient(service, "sess-1")

    assert relay.get_session_history() == []


@pytest.mark.parametrize("session_id", ["sess-1", "abc", "  spaced  ", "x" * 300])
def test_set_then_get_session_id(service, session_id):
    relay = SessionRelayClient(service)

    relay.set_session_id(session_id)

    assert relay.get_session_id() == session_id
    assert service.method_calls == []


def test_get_session_passes_backend_value_through(service):
    snapshot = Session(id="sess-1", messages=[], dominant_emotion="calm", last_active=99)
    service.get_session.return_value = snapshot
    relay = SessionRelayClient(service, "sess-1")

    assert relay.get_session() is snapshot


def test_get_session_degrades_to_none(service):
    service.get_session.side_effect = TransportError()

    assert SessionRelayClient(service, "sess-1").get_session() is None
    assert SessionRelayClient(service).get_session() is None


def test_handles_sharing_a_service_keep_their_own_pointer(service):
    service.send_message.return_value = SendMessageResult(
        success=Message(text="ok", timestamp=1, is_user=False)
    )
    first = open_relay(service, "sess-a")
    second = open_relay(service, "sess-b")

    first.send_message("to a")
    second.send_message("to b")
    first.send_message("to a again")

    targets = [c.args[0] for c in service.send_message.call_args_list]
    assert targets == ["sess-a", "sess-b", "sess-a"]


def test_open_relay_treats_empty_id_as_no_session(service):
    assert open_relay(service, "").get_session_id() is None
