"""
Prompt assembly for component generation turns.

Builds one outbound prompt from a bounded slice of the transcript, the
current artifact, the new request and an instruction suffix picked by a
substring intent classifier.

Dependencies: component_studio.models, component_studio.core.codegen.prompts
System role: Context-window assembly for multi-turn consistency
"""

from enum import Enum
from typing import Sequence

from component_studio.core.codegen.prompts import (
    OVERRIDE_INSTRUCTIONS,
    OVERRIDE_REQUEST_TEMPLATE,
    REGENERATE_INSTRUCTIONS,
)
from component_studio.models.session import Artifact, ChatMessage

CONTEXT_WINDOW = 5

ROLE_LABELS = {"user": "User", "assistant": "AI"}

OVERRIDE_MARKERS = ("modify the element", "element with id")


class PromptIntent(str, Enum):
    """Which instruction suffix a request gets."""

    REGENERATE = "regenerate"
    OVERRIDE = "override"


def classify_intent(request: str) -> PromptIntent:
    """
    Classify a request as a targeted element change or a full regenerate.

    Args:
        request: New user request text

    Returns:
        PromptIntent: OVERRIDE if the request names a specific element
    """
    lowered = request.lower()
    if any(marker in lowered for marker in OVERRIDE_MARKERS):
        return PromptIntent.OVERRIDE
    return PromptIntent.REGENERATE


def build_override_request(element_id: str, instruction: str) -> str:
    """
    Compose the request text for a targeted element modification.

    Args:
        element_id: id attribute of the element to change
        instruction: Requested change, in the user's words

    Returns:
        str: Request text that classify_intent recognises as OVERRIDE
    """
    return OVERRIDE_REQUEST_TEMPLATE.format(
        element_id=element_id,
        instruction=instruction.strip().rstrip("."),
    )


def is_duplicate_request(transcript: Sequence[ChatMessage], request: str) -> bool:
    """Return True if the last transcript entry is this same user request."""
    if not transcript:
        return False
    last = transcript[-1]
    return last.role == "user" and last.content == request


class PromptBuilder:
    """
    Assembles generation prompts.

    Usage:
        builder = PromptBuilder()
        prompt = builder.build(session.transcript, session.artifact, "make it blue")
    """

    def __init__(self, context_window: int = CONTEXT_WINDOW) -> None:
        self.context_window = context_window

    def build(
        self,
        transcript: Sequence[ChatMessage],
        artifact: Artifact,
        request: str,
    ) -> str:
        """
        Build the full prompt for one turn.

        Args:
            transcript: Persisted transcript before this turn, oldest first
            artifact: Current code artifact
            request: New user request text

        Returns:
            str: Prompt text with history, current code, request and instructions
        """
        sections = []

        history = self.render_history(transcript)
        if history:
            sections.append(f"Conversation so far:\n{history}")

        if not artifact.is_empty():
            sections.append(self.render_artifact(artifact))

        sections.append(f"User request: {request}")
        sections.append(self.instructions_for(request))
        return "\n\n".join(sections)

    def render_history(self, transcript: Sequence[ChatMessage]) -> str:
        """Render the last context_window entries as "Role: content" lines."""
        recent = list(transcript)[-self.context_window:] if self.context_window > 0 else []
        return "\n".join(
            f"{ROLE_LABELS.get(message.role, message.role)}: {message.content}"
            for message in recent
        )

    @staticmethod
    def render_artifact(artifact: Artifact) -> str:
        """Render the current code as labelled jsx and css fenced blocks."""
        return (
            "Current component code:\n"
            f"```jsx\n{artifact.markup}\n```\n"
            f"```css\n{artifact.style}\n```"
        )

    @staticmethod
    def instructions_for(request: str) -> str:
        if classify_intent(request) is PromptIntent.OVERRIDE:
            return OVERRIDE_INSTRUCTIONS
        return REGENERATE_INSTRUCTIONS
