"""Ownership Validator — loads a collection and applies the pure ownership decision.

Invariants:
    - Read-only: no writes, no side effects
    - Must run before any detail read or mutation of a collection or its requests
    - A narrow check-then-act window exists between this read and the caller's write;
      both steps run under the same authenticated identity and are not locked
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from courier.core.ownership import OwnershipResult, check_ownership, unwrap_ownership
from courier.models.collection import Collection

logger = logging.getLogger(__name__)


async def validate_ownership(
    db: AsyncSession, collection_id: UUID, user_id: UUID,
) -> OwnershipResult[Collection]:
    collection = await db.get(Collection, collection_id)
    return check_ownership(collection, user_id)


async def require_owned_collection(
    db: AsyncSession, collection_id: UUID, user_id: UUID,
) -> Collection:
    """Return the caller's collection or raise 404/403."""
    result = await validate_ownership(db, collection_id, user_id)
    if not result.ok:
        logger.info(
            f"Ownership check failed: {result.status.value}",
            extra={"collection_id": str(collection_id), "user_id": str(user_id)},
        )
    return unwrap_ownership(result, collection_id)
