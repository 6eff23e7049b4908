"""
Database models package.

Exports:
  - SessionModel: code-generation session ORM model

Dependencies: sqlalchemy, component_studio.boundary.db.base
System role: Database model definitions for domain entities
"""

from component_studio.boundary.db.models.session_model import SessionModel

__all__ = ["SessionModel"]
