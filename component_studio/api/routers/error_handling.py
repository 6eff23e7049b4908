"""
Session error handling utilities.

Provides a decorator that maps domain exceptions raised by the session
and chat services to HTTPExceptions with consistent logging.
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import HTTPException, status

from component_studio.core.exceptions import (
    GenerationError,
    InvalidRequestError,
    SessionNotFoundError,
    StoreError,
    TranscriptConflictError,
)
from component_studio.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

# Type for the decorated function
F = TypeVar("F", bound=Callable[..., Any])


def handle_session_errors(func: F) -> F:
    """
    Decorator to transform session/chat errors into HTTPExceptions.

    Mapping:
    - SessionNotFoundError -> 404
    - InvalidRequestError -> 400
    - TranscriptConflictError -> 409
    - GenerationError -> 502 (504 when the call timed out)
    - StoreError -> 503
    - anything else -> 500
    """
    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        context = {
            "session_id": str(kwargs.get("session_id")) if kwargs.get("session_id") else None,
            "owner_id": kwargs.get("owner_id"),
        }
        try:
            return await func(*args, **kwargs)

        except HTTPException:
            raise

        except SessionNotFoundError as e:
            logger.warning("Session not found", extra={**context, "error": str(e)})
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)

        except InvalidRequestError as e:
            logger.warning("Invalid session request", extra={**context, "error": str(e)})
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)

        except TranscriptConflictError as e:
            logger.warning("Stale transcript snapshot", extra={**context, "error": str(e)})
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)

        except GenerationError as e:
            logger.error("Generation failed", extra={**context, "error": str(e)})
            code = (
                status.HTTP_504_GATEWAY_TIMEOUT
                if e.reason == GenerationError.TIMEOUT
                else status.HTTP_502_BAD_GATEWAY
            )
            raise HTTPException(status_code=code, detail=f"Generation failed: {e.message}")

        except StoreError as e:
            logger.error("Session store failure", extra={**context, "error": str(e)})
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Session store unavailable",
            )

        except Exception as e:
            log_exception_with_context(logger, "Unexpected error in session endpoint", e, **context)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Server error",
            )

    return wrapper  # type: ignore
