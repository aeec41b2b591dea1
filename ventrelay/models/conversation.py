"""Wire models for the remote conversation service (sessions, messages, tagged results)."""
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def unwrap_opt(value: Any) -> Any:
    """Remote optionals arrive as [] / [value]; plain null / value are accepted too."""
    if isinstance(value, (list, tuple)):
        return value[0] if value else None
    return value


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class Message(_WireModel):
    text: str
    timestamp: int = Field(..., description="Backend-assigned sort key, unique within a session")
    is_user: bool = Field(..., alias="isUser")


class Session(_WireModel):
    id: str
    messages: list[Message] = Field(default_factory=list)
    dominant_emotion: str | None = Field(None, alias="dominantEmotion")
    last_active: int = Field(..., alias="lastActive")

    @field_validator("dominant_emotion", mode="before")
    @classmethod
    def _unwrap_emotion(cls, value: Any) -> Any:
        return unwrap_opt(value)


class _TaggedResult(_WireModel):
    """Either a success payload or an error string, never both."""

    @model_validator(mode="after")
    def _exactly_one_tag(self):
        if (self.success is None) == (self.error is None):
            raise ValueError("tagged result must carry exactly one of 'success' or 'error'")
        return self

    @property
    def is_error(self) -> bool:
        return self.error is not None


class NewSessionResult(_TaggedResult):
    success: str | None = None
    error: str | None = None


class SendMessageResult(_TaggedResult):
    success: Message | None = None
    error: str | None = None
