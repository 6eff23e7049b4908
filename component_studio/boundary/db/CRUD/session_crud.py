"""
Session CRUD operations.

Owner-scoped Create, Read, Update operations for SessionModel.

Dependencies: sqlalchemy, component_studio.boundary.db.models
System role: Session persistence operations
"""

from typing import Any, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from component_studio.boundary.db.CRUD.base_crud import BaseCRUD
from component_studio.boundary.db.models.session_model import SessionModel


class SessionCRUD(BaseCRUD[SessionModel]):
    """
    CRUD operations for SessionModel.

    Every lookup is keyed by (owner_id, id): a session owned by another
    user is reported exactly like a missing one.
    """

    def __init__(self) -> None:
        """Initialize SessionCRUD with SessionModel."""
        super().__init__(SessionModel)

    async def get_for_owner(
        self,
        session: AsyncSession,
        id: UUID,
        owner_id: str,
    ) -> SessionModel | None:
        """
        Retrieve a session by ID, scoped to its owner.

        Args:
            session: Async database session
            id: Session UUID
            owner_id: Owning user ID

        Returns:
            SessionModel if found and owned, None otherwise
        """
        return await self.get_one_where(
            session,
            SessionModel.id == id,
            SessionModel.owner_id == owner_id,
        )

    async def list_for_owner(
        self,
        session: AsyncSession,
        owner_id: str,
        limit: int | None = None,
    ) -> Sequence[SessionModel]:
        """
        Retrieve an owner's sessions, most recently updated first.

        Args:
            session: Async database session
            owner_id: Owning user ID
            limit: Maximum number of sessions to return

        Returns:
            Sequence of SessionModels
        """
        return await self.get_many_where(
            session,
            SessionModel.owner_id == owner_id,
            order_by=SessionModel.updated_at.desc(),
            limit=limit,
        )

    async def update_for_owner(
        self,
        session: AsyncSession,
        id: UUID,
        owner_id: str,
        **fields: Any,
    ) -> SessionModel | None:
        """
        Overwrite fields of an owned session.

        Args:
            session: Async database session
            id: Session UUID
            owner_id: Owning user ID
            **fields: Columns to replace (title, transcript, artifact, ui_state)

        Returns:
            Updated SessionModel if found, None otherwise
        """
        instance = await self.get_for_owner(session, id, owner_id)
        if instance is None:
            return None
        return await self.update_instance(session, instance, **fields)


session_crud = SessionCRUD()
