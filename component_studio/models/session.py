"""
Session domain models and schemas.

The Session aggregate (transcript + current code artifact) and the
request/response schemas for session operations. The same models are the
cache serialization format.

Dependencies: pydantic
System role: Session API contracts and cache payloads
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_TITLE = "Untitled Session"
TITLE_MAX_LENGTH = 255
OWNER_ID_MAX_LENGTH = 128


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ChatMessage(BaseModel):
    """Single transcript entry."""

    role: Literal["user", "assistant"] = Field(description="Message author")
    content: str = Field(description="Message text")
    timestamp: datetime = Field(default_factory=utc_now)

    @field_validator("role", mode="before")
    @classmethod
    def normalize_role(cls, value: Any) -> Any:
        # Older clients label model replies "ai"
        if isinstance(value, str) and value.lower() == "ai":
            return "assistant"
        return value


class Artifact(BaseModel):
    """Current generated component: JSX markup plus stylesheet."""

    markup: str = ""
    style: str = ""

    def is_empty(self) -> bool:
        return not self.markup and not self.style


class Session(BaseModel):
    """Full session as returned by the API and stored in the entity cache."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    owner_id: str
    title: str = DEFAULT_TITLE
    transcript: list[ChatMessage] = Field(default_factory=list)
    artifact: Artifact = Field(default_factory=Artifact)
    ui_state: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime
    updated_at: datetime


class SessionSummary(BaseModel):
    """List-view projection of a session."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    title: str
    updated_at: datetime


class CreateSessionRequest(BaseModel):
    """Request schema for creating a new session."""

    title: str | None = Field(default=None, max_length=TITLE_MAX_LENGTH, description="Display title")
    transcript: list[ChatMessage] | None = Field(default=None, description="Initial transcript")
    artifact: Artifact | None = Field(default=None, description="Initial code artifact")
    ui_state: dict[str, Any] | None = Field(default=None, description="Opaque client state")


class UpdateSessionRequest(BaseModel):
    """Partial overwrite of a session; omitted fields are left untouched."""

    title: str | None = Field(default=None, max_length=TITLE_MAX_LENGTH)
    transcript: list[ChatMessage] | None = None
    artifact: Artifact | None = None
    ui_state: dict[str, Any] | None = None
