"""
Domain models and API schemas.

Exports:
  - ChatMessage, Artifact, Session, SessionSummary: session domain models
  - CreateSessionRequest, UpdateSessionRequest: session request schemas
  - ChatRequest, OverrideRequest: chat turn request schemas
"""

from component_studio.models.chat import ChatRequest, OverrideRequest
from component_studio.models.session import (
    Artifact,
    ChatMessage,
    CreateSessionRequest,
    Session,
    SessionSummary,
    UpdateSessionRequest,
)

__all__ = [
    "Artifact",
    "ChatMessage",
    "ChatRequest",
    "CreateSessionRequest",
    "OverrideRequest",
    "Session",
    "SessionSummary",
    "UpdateSessionRequest",
]
