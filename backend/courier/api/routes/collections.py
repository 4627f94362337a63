"""Collection Routes — CRUD over the caller's collections.

Invariants:
    - Every route requires a verified session
    - get/update/delete run the ownership check (404 absent, 403 not owner) first
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from courier.api.dependencies import get_current_user
from courier.infrastructure.database import get_db
from courier.models.user import User
from courier.schemas.collection import (
    CollectionDetail, CollectionResponse, CollectionSummary, CollectionWrite,
)
from courier.services import collection_service

router = APIRouter(prefix="/api/collections", tags=["collections"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_collection(
    body: CollectionWrite,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    collection = await collection_service.create_collection(db, user.id, body.name)
    return {
        "message": "Collection created successfully",
        "collection": CollectionResponse.model_validate(collection),
    }


@router.get("")
async def list_collections(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Caller's collections, newest first, each with its request count."""
    collections = await collection_service.list_collections(db, user.id)
    return {
        "message": "Collections retrieved successfully",
        "collections": [
            CollectionSummary(
                **CollectionResponse.model_validate(c).model_dump(),
                request_count=len(c.requests),
            )
            for c in collections
        ],
        "count": len(collections),
    }


@router.get("/{collection_id}")
async def get_collection(
    collection_id: UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    collection = await collection_service.get_collection(db, collection_id, user.id)
    return {
        "message": "Collection retrieved successfully",
        "collection": CollectionDetail.model_validate(collection),
    }


@router.put("/{collection_id}")
async def update_collection(
    collection_id: UUID,
    body: CollectionWrite,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    collection = await collection_service.rename_collection(
        db, collection_id, user.id, body.name,
    )
    return {
        "message": "Collection updated successfully",
        "collection": CollectionResponse.model_validate(collection),
    }


@router.delete("/{collection_id}")
async def delete_collection(
    collection_id: UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Delete a collection and every request saved in it."""
    await collection_service.delete_collection(db, collection_id, user.id)
    return {"message": "Collection deleted successfully"}
