"""
Structured logging helpers.

Renders log context values into short, bounded strings. Prompts and
generated code are truncated; transcripts and sessions are summarized
instead of dumped, so a log line never carries a whole conversation.

Dependencies: logging (stdlib), pydantic, component_studio.models
System role: Logging helper functions
"""

import logging
from typing import Any

from pydantic import BaseModel

from component_studio.models.session import Artifact, ChatMessage, Session

MAX_VALUE_LENGTH = 200


def _truncate(text: str, max_length: int) -> str:
    if len(text) <= max_length:
        return text
    return f"{text[:max_length]}... ({len(text)} chars)"


def describe(value: Any, max_length: int = MAX_VALUE_LENGTH) -> str:
    """
    Summarize a value for a log field.

    Args:
        value: Anything passed as log context
        max_length: Character limit for free text

    Returns:
        str: Bounded, single-value description

    Examples:
        describe(session) -> "Session(id=..., transcript=4, markup=312 chars)"
        describe(message) -> "user: make a button"
        describe(transcript) -> "transcript(7 entries, last=assistant)"
    """
    if value is None:
        return "None"
    if isinstance(value, Session):
        return (
            f"Session(id={value.id}, transcript={len(value.transcript)}, "
            f"markup={len(value.artifact.markup)} chars)"
        )
    if isinstance(value, Artifact):
        return f"Artifact(markup={len(value.markup)} chars, style={len(value.style)} chars)"
    if isinstance(value, ChatMessage):
        return f"{value.role}: {_truncate(value.content, max_length)}"
    if isinstance(value, (list, tuple)):
        if value and all(isinstance(item, ChatMessage) for item in value):
            return f"transcript({len(value)} entries, last={value[-1].role})"
        return f"{type(value).__name__}({len(value)} items)"
    if isinstance(value, dict):
        return f"dict({len(value)} keys)"
    if isinstance(value, BaseModel):
        return type(value).__name__
    return _truncate(str(value), max_length)


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context,
) -> None:
    """
    Log a message with every context value passed through describe().

    Args:
        logger: Logger instance
        level: Log level (logging.INFO, etc.)
        message: Log message
        **context: Fields attached to the record via extra
    """
    logger.log(level, message, extra={key: describe(val) for key, val in context.items()})


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: Exception,
    **context,
) -> None:
    """
    Log an exception with traceback, its type and message, and context.

    Args:
        logger: Logger instance
        message: Log message
        exc: Exception instance
        **context: Fields attached to the record via extra
    """
    extra = {key: describe(val) for key, val in context.items()}
    extra["error_type"] = type(exc).__name__
    extra["error_msg"] = _truncate(str(exc), MAX_VALUE_LENGTH)
    logger.exception(message, extra=extra)
