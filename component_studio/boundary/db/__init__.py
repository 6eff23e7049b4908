"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(): Async connection management
  - SessionModel: Session entity
  - SessionCRUD, session_crud: Owner-scoped session persistence

Dependencies: sqlalchemy, component_studio.configs
System role: Durable session store adapter
"""

from component_studio.boundary.db.base import Base, TimestampMixin, UUIDMixin
from component_studio.boundary.db.connection import (
    STORE_FAULTS,
    create_tables,
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from component_studio.boundary.db.models.session_model import SessionModel
from component_studio.boundary.db.CRUD import BaseCRUD, SessionCRUD, session_crud

__all__ = [
    # Base classes
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    # Connection
    "STORE_FAULTS",
    "create_tables",
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    # Models
    "SessionModel",
    # CRUD
    "BaseCRUD",
    "SessionCRUD",
    "session_crud",
]
