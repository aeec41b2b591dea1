"""API request and response models. Field names on the wire are camelCase to match the chat UI."""
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


class ChatTurn(BaseModel):
    # UI sends extra keys (id, role, createdAt, ...); only content is used
    model_config = ConfigDict(extra="allow")

    content: str = Field(..., description="Message text")


class ChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    messages: list[ChatTurn] = Field(..., min_length=1, description="Conversation so far; the last entry is sent")
    session_id: str | None = Field(None, alias="sessionId", description="Session to continue; omit for a new one")

    @field_validator("session_id", mode="before")
    @classmethod
    def _normalize_session_id(cls, value):
        return _blank_to_none(value)


class ChatResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    response: str = Field(..., description="Backend reply text")
    session_id: str = Field(..., alias="sessionId", description="Session id (use for follow-up messages)")


class ChatMessage(BaseModel):
    id: str = Field(..., description="String form of the backend timestamp")
    role: Literal["user", "assistant"]
    content: str


class ChatHistoryResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    messages: list[ChatMessage]
    session_id: str = Field(..., alias="sessionId")
