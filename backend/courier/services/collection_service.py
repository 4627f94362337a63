"""Collection Repository — ownership-gated CRUD over collections."""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from courier.models.collection import Collection
from courier.services.ownership_service import require_owned_collection

logger = logging.getLogger(__name__)


async def create_collection(db: AsyncSession, user_id: UUID, name: str) -> Collection:
    collection = Collection(name=name, user_id=user_id)
    db.add(collection)
    await db.commit()
    await db.refresh(collection)
    logger.info(
        "Collection created",
        extra={"collection_id": str(collection.id), "user_id": str(user_id)},
    )
    return collection


async def list_collections(db: AsyncSession, user_id: UUID) -> list[Collection]:
    """Owner's collections, newest first; ties broken by id for a stable order."""
    result = await db.execute(
        select(Collection)
        .where(Collection.user_id == user_id)
        .order_by(Collection.created_at.desc(), Collection.id.desc()),
    )
    return list(result.scalars().all())


async def get_collection(
    db: AsyncSession, collection_id: UUID, user_id: UUID,
) -> Collection:
    return await require_owned_collection(db, collection_id, user_id)


async def rename_collection(
    db: AsyncSession, collection_id: UUID, user_id: UUID, name: str,
) -> Collection:
    collection = await require_owned_collection(db, collection_id, user_id)
    collection.name = name
    await db.commit()
    await db.refresh(collection)
    return collection


async def delete_collection(
    db: AsyncSession, collection_id: UUID, user_id: UUID,
) -> None:
    collection = await require_owned_collection(db, collection_id, user_id)
    await db.delete(collection)
    await db.commit()
    logger.info(
        "Collection deleted",
        extra={"collection_id": str(collection_id), "user_id": str(user_id)},
    )
