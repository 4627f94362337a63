"""Collection ORM — a named group of saved requests owned by one user.

Invariants:
    - user_id is set at creation and never reassigned (authorization lookups only)
    - Deleting a collection deletes its requests (ORM cascade + ON DELETE CASCADE)
    - requests relationship ordered newest first, id descending on ties (same as the list query)

Design Decisions:
    - lazy="selectin" on requests: async sessions cannot lazy-load on attribute access
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from courier.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Collection(Base):
    __tablename__ = "collections"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow,
    )

    requests: Mapped[list["ApiRequest"]] = relationship(
        "ApiRequest", back_populates="collection",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="[ApiRequest.created_at.desc(), ApiRequest.id.desc()]",
    )
