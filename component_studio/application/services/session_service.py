"""
Session service orchestrator.

Cache-aside session lifecycle: reads try the cache and fall back to the
store (repopulating the cache); writes go to the store first and only
after a successful commit update the entity key and invalidate the
owner's list key.

Dependencies: component_studio.boundary.db, component_studio.boundary.cache, component_studio.models
System role: Session use case orchestration
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Iterable
from uuid import UUID

from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from component_studio.boundary.cache.cache_gateway import CacheGateway
from component_studio.boundary.db.connection import STORE_FAULTS
from component_studio.boundary.db.CRUD.session_crud import session_crud
from component_studio.core.exceptions import (
    InvalidRequestError,
    SessionNotFoundError,
    StoreError,
    TranscriptConflictError,
)
from component_studio.models.session import (
    DEFAULT_TITLE,
    Artifact,
    ChatMessage,
    Session,
    SessionSummary,
    UpdateSessionRequest,
    utc_now,
)

logger = logging.getLogger(__name__)

DEFAULT_LIST_TTL_SECONDS = 300


def dump_transcript(messages: Iterable[ChatMessage]) -> list[dict[str, Any]]:
    """Convert transcript entries to JSON-column form."""
    return [message.model_dump(mode="json") for message in messages]


class SessionService:
    """Session service orchestrator."""

    def __init__(
        self,
        db: AsyncSession,
        cache: CacheGateway,
        list_ttl_seconds: int = DEFAULT_LIST_TTL_SECONDS,
    ) -> None:
        """
        Initialize session service.

        Args:
            db: Async SQLAlchemy session (request scoped)
            cache: Shared cache gateway
            list_ttl_seconds: Expiry for the per-owner list key
        """
        self.db = db
        self.cache = cache
        self.list_ttl_seconds = list_ttl_seconds

    @asynccontextmanager
    async def _store_operation(
        self,
        operation: str,
        session_id: UUID | None = None,
    ) -> AsyncIterator[None]:
        """Translate store faults into StoreError after rolling back."""
        try:
            yield
        except STORE_FAULTS as e:
            logger.error(
                f"{__name__}:{operation} - Store failure: {type(e).__name__}: {e}",
                extra={"session_id": str(session_id) if session_id else None},
            )
            try:
                await self.db.rollback()
            except STORE_FAULTS as rollback_error:
                logger.warning(
                    f"{__name__}:{operation} - Rollback failed: {type(rollback_error).__name__}: {rollback_error}"
                )
            raise StoreError(
                f"Session store {operation} failed: {e}",
                operation=operation,
            ) from e

    async def list_sessions(self, owner_id: str) -> list[SessionSummary]:
        """
        List an owner's sessions, most recently updated first.

        Served from the list key when present; otherwise read from the
        store and cached with the list TTL.

        Args:
            owner_id: Owning user ID

        Returns:
            list[SessionSummary]: Summaries ordered by updated_at descending

        Raises:
            StoreError: If the store query fails
        """
        key = CacheGateway.list_key(owner_id)
        cached = await self.cache.get(key)
        if cached is not None:
            try:
                return [SessionSummary.model_validate(item) for item in cached]
            except (ValidationError, TypeError) as e:
                logger.warning(f"{__name__}:list_sessions - Discarding unreadable cache entry: {e}")

        async with self._store_operation("list"):
            rows = await session_crud.list_for_owner(self.db, owner_id)

        summaries = [SessionSummary.model_validate(row) for row in rows]
        await self.cache.set(
            key,
            [summary.model_dump(mode="json") for summary in summaries],
            ttl=self.list_ttl_seconds,
        )
        return summaries

    async def create_session(
        self,
        owner_id: str,
        title: str | None = None,
        transcript: list[ChatMessage] | None = None,
        artifact: Artifact | None = None,
        ui_state: dict[str, Any] | None = None,
    ) -> Session:
        """
        Create a session and invalidate the owner's list key.

        Args:
            owner_id: Owning user ID
            title: Display title (defaults to "Untitled Session")
            transcript: Initial transcript
            artifact: Initial code artifact
            ui_state: Opaque client state

        Returns:
            Session: Created session

        Raises:
            StoreError: If the insert fails
        """
        async with self._store_operation("create"):
            row = await session_crud.create(
                self.db,
                owner_id=owner_id,
                title=title or DEFAULT_TITLE,
                transcript=dump_transcript(transcript or []),
                artifact=(artifact or Artifact()).model_dump(),
                ui_state=dict(ui_state or {}),
            )
            await self.db.commit()

        session = Session.model_validate(row)
        logger.info(f"{__name__}:create_session - Created session {session.id} for owner {owner_id}")
        await self.cache.delete(CacheGateway.list_key(owner_id))
        return session

    async def get_session(
        self,
        owner_id: str,
        session_id: UUID,
        use_cache: bool = True,
    ) -> Session:
        """
        Get a full session.

        Args:
            owner_id: Owning user ID
            session_id: Session UUID
            use_cache: Read through the entity key; False reads the store only

        Returns:
            Session: The session

        Raises:
            SessionNotFoundError: If missing or owned by someone else
            StoreError: If the store query fails
        """
        key = CacheGateway.entity_key(session_id, owner_id)
        if use_cache:
            cached = await self.cache.get(key)
            if cached is not None:
                try:
                    return Session.model_validate(cached)
                except (ValidationError, TypeError) as e:
                    logger.warning(f"{__name__}:get_session - Discarding unreadable cache entry: {e}")

        async with self._store_operation("read", session_id):
            row = await session_crud.get_for_owner(self.db, session_id, owner_id)
        if row is None:
            raise SessionNotFoundError(str(session_id))

        session = Session.model_validate(row)
        if use_cache:
            await self.cache.set(key, session.model_dump(mode="json"))
        return session

    async def update_session(
        self,
        owner_id: str,
        session_id: UUID,
        changes: UpdateSessionRequest,
    ) -> Session:
        """
        Overwrite the provided fields of a session.

        Args:
            owner_id: Owning user ID
            session_id: Session UUID
            changes: Fields to replace; None fields are left untouched

        Returns:
            Session: Updated session

        Raises:
            SessionNotFoundError: If missing or owned by someone else
            StoreError: If the update fails
        """
        fields: dict[str, Any] = {}
        if changes.title is not None:
            fields["title"] = changes.title
        if changes.transcript is not None:
            fields["transcript"] = dump_transcript(changes.transcript)
        if changes.artifact is not None:
            fields["artifact"] = changes.artifact.model_dump()
        if changes.ui_state is not None:
            fields["ui_state"] = dict(changes.ui_state)

        session = await self._persist(owner_id, session_id, "update", **fields)
        await self.sync_cache(session)
        return session

    async def delete_message(
        self,
        owner_id: str,
        session_id: UUID,
        index: int,
        expected_length: int | None = None,
    ) -> Session:
        """
        Remove one transcript entry by position.

        Args:
            owner_id: Owning user ID
            session_id: Session UUID
            index: Zero-based position of the entry to remove
            expected_length: Transcript length the caller saw; rejects stale snapshots

        Returns:
            Session: Updated session

        Raises:
            TranscriptConflictError: If expected_length differs from the stored length
            InvalidRequestError: If index is out of range
            SessionNotFoundError: If missing or owned by someone else
            StoreError: If the update fails
        """
        current = await self.get_session(owner_id, session_id, use_cache=False)
        transcript = list(current.transcript)

        if expected_length is not None and expected_length != len(transcript):
            raise TranscriptConflictError(str(session_id), expected_length, len(transcript))
        if not 0 <= index < len(transcript):
            raise InvalidRequestError(
                f"Transcript index {index} out of range (0..{len(transcript) - 1})",
                field="index",
            )

        del transcript[index]
        session = await self._persist(
            owner_id, session_id, "delete_message", transcript=dump_transcript(transcript)
        )
        await self.sync_cache(session)
        return session

    async def clear_transcript(self, owner_id: str, session_id: UUID) -> Session:
        """
        Remove every transcript entry; the artifact is kept.

        Raises:
            SessionNotFoundError: If missing or owned by someone else
            StoreError: If the update fails
        """
        session = await self._persist(owner_id, session_id, "clear_transcript", transcript=[])
        await self.sync_cache(session)
        return session

    async def persist_turn(
        self,
        owner_id: str,
        session_id: UUID,
        transcript: list[ChatMessage],
        artifact: Artifact,
    ) -> Session:
        """
        Store the outcome of a chat turn without touching the cache.

        The caller runs sync_cache afterwards.

        Raises:
            SessionNotFoundError: If the session vanished during the turn
            StoreError: If the update fails
        """
        return await self._persist(
            owner_id,
            session_id,
            "persist_turn",
            transcript=dump_transcript(transcript),
            artifact=artifact.model_dump(),
        )

    async def sync_cache(self, session: Session) -> None:
        """Overwrite the entity key and drop the owner's list key."""
        await self.cache.set(
            CacheGateway.entity_key(session.id, session.owner_id),
            session.model_dump(mode="json"),
        )
        await self.cache.delete(CacheGateway.list_key(session.owner_id))

    async def _persist(
        self,
        owner_id: str,
        session_id: UUID,
        operation: str,
        **fields: Any,
    ) -> Session:
        """Write fields to the store and commit; no cache side effects."""
        fields["updated_at"] = utc_now()
        async with self._store_operation(operation, session_id):
            row = await session_crud.update_for_owner(self.db, session_id, owner_id, **fields)
            if row is None:
                raise SessionNotFoundError(str(session_id))
            await self.db.commit()
        return Session.model_validate(row)
