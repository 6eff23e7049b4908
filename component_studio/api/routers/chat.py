"""Chat API endpoints.

Routes:
- POST /sessions/{session_id}/chat - Run a generation turn
- POST /sessions/{session_id}/override - Run a turn targeting one element

Dependencies: component_studio.application.services.chat_service
System role: Chat messaging HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends

from component_studio.api.deps import get_chat_service, get_owner_id
from component_studio.api.routers.error_handling import handle_session_errors
from component_studio.application.services.chat_service import ChatService
from component_studio.models.chat import ChatRequest, OverrideRequest
from component_studio.models.session import Session

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["chat"])


@router.post("/{session_id}/chat", response_model=Session)
@handle_session_errors
async def chat(
    session_id: UUID,
    request: ChatRequest,
    owner_id: str = Depends(get_owner_id),
    chat_service: ChatService = Depends(get_chat_service),
) -> Session:
    """Send a prompt and receive the session with the regenerated component.

    Flow:
    1. ChatService builds the prompt from recent transcript and current code
    2. Gemini generates the component
    3. The extracted artifact and both messages are persisted

    Args:
        session_id: Session UUID
        request: ChatRequest with prompt and optional timeout
        owner_id: Caller identity
        chat_service: Injected ChatService

    Returns:
        Session: Updated session

    Raises:
        HTTPException(404): Session not found
        HTTPException(502/504): Generation failed or timed out
        HTTPException(503): Store unavailable
    """
    logger.info(f"{__name__}:chat - session_id={session_id}")
    return await chat_service.process_turn(
        owner_id,
        session_id,
        request.prompt,
        timeout=request.timeout_seconds,
    )


@router.post("/{session_id}/override", response_model=Session)
@handle_session_errors
async def override_element(
    session_id: UUID,
    request: OverrideRequest,
    owner_id: str = Depends(get_owner_id),
    chat_service: ChatService = Depends(get_chat_service),
) -> Session:
    """Ask for a change to a single element of the current component.

    Raises:
        HTTPException(404): Session not found
        HTTPException(502/504): Generation failed or timed out
        HTTPException(503): Store unavailable
    """
    logger.info(f"{__name__}:override_element - session_id={session_id} element_id={request.element_id}")
    return await chat_service.process_override(
        owner_id,
        session_id,
        request.element_id,
        request.instruction,
        timeout=request.timeout_seconds,
    )
