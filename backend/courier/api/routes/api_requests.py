"""Saved Request Routes — requests nested under collections, plus update/delete by id.

Invariants:
    - Every route, including delete, requires a verified session
    - Ownership is checked through the parent collection before any read or write
    - PUT is a merge-patch: omitted fields keep their stored values
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from courier.api.dependencies import get_current_user
from courier.infrastructure.database import get_db
from courier.models.user import User
from courier.schemas.api_request import (
    ApiRequestCreate, ApiRequestResponse, ApiRequestUpdate,
)
from courier.services import api_request_service

router = APIRouter(prefix="/api", tags=["requests"])


@router.post(
    "/collections/{collection_id}/requests",
    status_code=status.HTTP_201_CREATED,
)
async def create_request(
    collection_id: UUID,
    body: ApiRequestCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    api = await api_request_service.create_request(db, collection_id, user.id, body)
    return {
        "message": "Request created successfully",
        "api": ApiRequestResponse.model_validate(api),
    }


@router.get("/collections/{collection_id}/requests")
async def list_requests(
    collection_id: UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    apis = await api_request_service.list_requests(db, collection_id, user.id)
    return {
        "message": "Requests retrieved successfully",
        "api": [ApiRequestResponse.model_validate(a) for a in apis],
    }


@router.put("/requests/{request_id}")
async def update_request(
    request_id: UUID,
    body: ApiRequestUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    api = await api_request_service.update_request(
        db, request_id, user.id, body.to_patch(),
    )
    return {
        "message": "Request updated successfully",
        "updated_api": ApiRequestResponse.model_validate(api),
    }


@router.delete("/requests/{request_id}")
async def delete_request(
    request_id: UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await api_request_service.delete_request(db, request_id, user.id)
    return {"message": "Request deleted successfully"}
