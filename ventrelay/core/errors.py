"""Relay error taxonomy. Messages are safe to show to end users; backend details only go to logs."""


class RelayError(Exception):
    """Base class for every failure raised by the relay layer."""

    default_message = "The conversation service is unavailable."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)


class TransportError(RelayError):
    """The remote conversation service could not be reached or answered with garbage."""

    default_message = "The conversation service could not be reached."


class NoActiveSessionError(RelayError):
    default_message = "No active session. Please create a session first."


class SessionCreationError(RelayError):
    default_message = "Could not start a new session. Please try again later."


class MessageSendError(RelayError):
    default_message = "Message could not be sent. Please try again."
