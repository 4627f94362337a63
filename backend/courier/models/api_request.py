"""ApiRequest ORM — a saved, reusable description of one HTTP call.

Invariants:
    - collection_id references the owning Collection; ownership is always checked
      through that collection
    - headers / authentication / body are optional JSON; None is stored as SQL NULL
    - method is stored upper-cased
"""

import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import String, Text, DateTime, ForeignKey, JSON, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from courier.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ApiRequest(Base):
    __tablename__ = "api_requests"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    url: Mapped[str] = mapped_column(Text, nullable=False)
    method: Mapped[str] = mapped_column(String(10), nullable=False)
    headers: Mapped[dict | None] = mapped_column(
        JSON(none_as_null=True), nullable=True,
    )
    authentication: Mapped[dict | None] = mapped_column(
        JSON(none_as_null=True), nullable=True,
    )
    body: Mapped[Any] = mapped_column(JSON(none_as_null=True), nullable=True)
    collection_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("collections.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow,
    )

    collection: Mapped["Collection"] = relationship(
        "Collection", back_populates="requests", lazy="noload",
    )
