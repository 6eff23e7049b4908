"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from component_studio.boundary.db.CRUD import session_crud

    session = await session_crud.get_for_owner(db, session_id, owner_id)
"""

from component_studio.boundary.db.CRUD.base_crud import BaseCRUD
from component_studio.boundary.db.CRUD.session_crud import SessionCRUD, session_crud

__all__ = [
    "BaseCRUD",
    "SessionCRUD",
    "session_crud",
]
