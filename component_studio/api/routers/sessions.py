"""
Session API endpoints.

Routes:
- GET /sessions - List the caller's sessions
- POST /sessions - Create session
- GET /sessions/{id} - Get full session
- PUT /sessions/{id} - Overwrite title/transcript/artifact/ui_state
- DELETE /sessions/{id}/transcript/{index} - Delete one transcript entry
- DELETE /sessions/{id}/transcript - Clear the transcript

Dependencies: component_studio.application.services.session_service, component_studio.models
System role: Session management HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from component_studio.api.deps import get_owner_id, get_session_service
from component_studio.api.routers.error_handling import handle_session_errors
from component_studio.application.services.session_service import SessionService
from component_studio.models.session import (
    CreateSessionRequest,
    Session,
    SessionSummary,
    UpdateSessionRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.get("", response_model=list[SessionSummary])
@handle_session_errors
async def list_sessions(
    owner_id: str = Depends(get_owner_id),
    session_service: SessionService = Depends(get_session_service),
) -> list[SessionSummary]:
    """
    List the caller's sessions, most recently updated first.

    Returns:
        list[SessionSummary]: id, title and updated_at per session
    """
    return await session_service.list_sessions(owner_id)


@router.post("", response_model=Session, status_code=status.HTTP_201_CREATED)
@handle_session_errors
async def create_session(
    request: CreateSessionRequest,
    owner_id: str = Depends(get_owner_id),
    session_service: SessionService = Depends(get_session_service),
) -> Session:
    """
    Create a new session.

    Args:
        request: Optional title, transcript, artifact and ui_state
        owner_id: Caller identity
        session_service: Injected SessionService

    Returns:
        Session: Created session

    Raises:
        HTTPException(503): Store unavailable
    """
    return await session_service.create_session(
        owner_id,
        title=request.title,
        transcript=request.transcript,
        artifact=request.artifact,
        ui_state=request.ui_state,
    )


@router.get("/{session_id}", response_model=Session)
@handle_session_errors
async def get_session(
    session_id: UUID,
    owner_id: str = Depends(get_owner_id),
    session_service: SessionService = Depends(get_session_service),
) -> Session:
    """
    Get a session with its transcript and current artifact.

    Raises:
        HTTPException(404): Session not found or not owned by the caller
    """
    return await session_service.get_session(owner_id, session_id)


@router.put("/{session_id}", response_model=Session)
@handle_session_errors
async def update_session(
    session_id: UUID,
    request: UpdateSessionRequest,
    owner_id: str = Depends(get_owner_id),
    session_service: SessionService = Depends(get_session_service),
) -> Session:
    """
    Overwrite the provided session fields.

    Raises:
        HTTPException(404): Session not found
        HTTPException(503): Store unavailable
    """
    return await session_service.update_session(owner_id, session_id, request)


@router.delete("/{session_id}/transcript/{index}", response_model=Session)
@handle_session_errors
async def delete_message(
    session_id: UUID,
    index: int,
    expected_length: int | None = Query(
        default=None,
        ge=0,
        description="Transcript length the client last saw",
    ),
    owner_id: str = Depends(get_owner_id),
    session_service: SessionService = Depends(get_session_service),
) -> Session:
    """
    Delete one transcript entry.

    Raises:
        HTTPException(400): Index out of range
        HTTPException(404): Session not found
        HTTPException(409): Transcript changed since the client's snapshot
    """
    return await session_service.delete_message(
        owner_id, session_id, index, expected_length=expected_length
    )


@router.delete("/{session_id}/transcript", response_model=Session)
@handle_session_errors
async def clear_transcript(
    session_id: UUID,
    owner_id: str = Depends(get_owner_id),
    session_service: SessionService = Depends(get_session_service),
) -> Session:
    """Remove every transcript entry, keeping the current artifact."""
    return await session_service.clear_transcript(owner_id, session_id)
