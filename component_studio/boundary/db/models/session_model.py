"""
Session ORM model.

Represents one user's component-building conversation: the transcript,
the current code artifact and opaque UI state, stored document-style in
JSON columns.

Dependencies: sqlalchemy, component_studio.boundary.db.base
System role: Durable source of truth for sessions
"""

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from component_studio.boundary.db.base import Base, UUIDMixin, TimestampMixin
from component_studio.models.session import DEFAULT_TITLE, OWNER_ID_MAX_LENGTH, TITLE_MAX_LENGTH


def _empty_artifact() -> dict:
    return {"markup": "", "style": ""}


class SessionModel(Base, UUIDMixin, TimestampMixin):
    """
    Session ORM model.

    Rows are always addressed by (owner_id, id); the owner is fixed at
    creation. JSON columns are replaced wholesale on update, never mutated
    in place, so change tracking sees every write.

    Attributes:
        id: UUID primary key (auto-generated)
        owner_id: Identifier of the owning user
        title: Display title
        transcript: List of {role, content, timestamp} dicts, oldest first
        artifact: {markup, style} dict for the current component
        ui_state: Opaque client state, passed through
        created_at: Session creation timestamp (UTC)
        updated_at: Last modification timestamp (UTC)
    """

    __tablename__ = "code_sessions"

    owner_id: Mapped[str] = mapped_column(
        String(OWNER_ID_MAX_LENGTH),
        nullable=False,
        index=True,
        doc="Owning user identifier",
    )
    title: Mapped[str] = mapped_column(
        String(TITLE_MAX_LENGTH),
        nullable=False,
        default=DEFAULT_TITLE,
    )
    transcript: Mapped[list] = mapped_column(
        JSON,
        nullable=False,
        default=list,
        doc="Ordered chat transcript",
    )
    artifact: Mapped[dict] = mapped_column(
        JSON,
        nullable=False,
        default=_empty_artifact,
        doc="Current generated markup and style",
    )
    ui_state: Mapped[dict] = mapped_column(
        JSON,
        nullable=False,
        default=dict,
        doc="Opaque client UI state",
    )
