"""Ownership Decision — pure tri-state check of a collection against a user.

Invariants:
    - Absent collection → NOT_FOUND (404 upstream), never FORBIDDEN
    - Present but owned by someone else → FORBIDDEN (403 upstream)
    - user_id always comes from the verified session, never from request bodies

Design Decisions:
    - Pure function over the loaded row: the read lives in services/ownership_service.py,
      so the decision is testable without a database
    - Protocol over ORM import: core never imports from the shell
"""

from dataclasses import dataclass
from typing import Generic, Protocol, TypeVar
from uuid import UUID

from courier.core.domain_types import OwnershipStatus
from courier.core.errors import ForbiddenError, ResourceNotFoundError


class OwnedLike(Protocol):
    """Structural contract for anything that carries an owner back-reference."""
    id: UUID
    user_id: UUID


T = TypeVar("T", bound=OwnedLike)


@dataclass(frozen=True)
class OwnershipResult(Generic[T]):
    status: OwnershipStatus
    collection: T | None = None

    @property
    def ok(self) -> bool:
        return self.status is OwnershipStatus.OK


def check_ownership(collection: T | None, user_id: UUID) -> OwnershipResult[T]:
    """Decide NOT_FOUND / FORBIDDEN / OK for an already-loaded collection."""
    if collection is None:
        return OwnershipResult(OwnershipStatus.NOT_FOUND)
    if collection.user_id != user_id:
        return OwnershipResult(OwnershipStatus.FORBIDDEN)
    return OwnershipResult(OwnershipStatus.OK, collection)


def unwrap_ownership(result: OwnershipResult[T], collection_id: UUID) -> T:
    """Return the collection or raise the matching 404/403 error."""
    match result.status:
        case OwnershipStatus.OK:
            return result.collection
        case OwnershipStatus.NOT_FOUND:
            raise ResourceNotFoundError("Collection", str(collection_id))
        case OwnershipStatus.FORBIDDEN:
            raise ForbiddenError("Unauthorized access")
