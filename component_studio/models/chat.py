"""
Chat domain models and schemas.

Request schemas for chat turns. Both endpoints respond with the updated
Session.

Dependencies: pydantic
System role: Chat API contracts
"""

from pydantic import BaseModel, Field


class ChatRequest(BaseModel):
    """Request schema for a conversational turn."""

    prompt: str = Field(min_length=1, description="User request text")
    timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Upper bound for the generation call (defaults to configured value)",
    )


class OverrideRequest(BaseModel):
    """Request schema for a targeted element modification."""

    element_id: str = Field(min_length=1, description="id attribute of the element to change")
    instruction: str = Field(min_length=1, description="What to change about the element")
    timeout_seconds: float | None = Field(default=None, gt=0)
