"""APIRequest Repository — saved requests scoped under an owned collection.

Invariants:
    - create/list check the parent collection named in the path
    - update/delete locate the request first, then check its parent collection;
      a missing request is 404 before any ownership decision
    - update applies a merge-patch (ApiRequestUpdate.to_patch)
"""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from courier.core.errors import ResourceNotFoundError
from courier.models.api_request import ApiRequest
from courier.schemas.api_request import ApiRequestCreate
from courier.services.ownership_service import require_owned_collection

logger = logging.getLogger(__name__)


async def create_request(
    db: AsyncSession, collection_id: UUID, user_id: UUID, body: ApiRequestCreate,
) -> ApiRequest:
    await require_owned_collection(db, collection_id, user_id)
    api = ApiRequest(collection_id=collection_id, **body.model_dump())
    db.add(api)
    await db.commit()
    await db.refresh(api)
    logger.info(
        "Request saved",
        extra={"request_id": str(api.id), "collection_id": str(collection_id)},
    )
    return api


async def list_requests(
    db: AsyncSession, collection_id: UUID, user_id: UUID,
) -> list[ApiRequest]:
    await require_owned_collection(db, collection_id, user_id)
    result = await db.execute(
        select(ApiRequest)
        .where(ApiRequest.collection_id == collection_id)
        .order_by(ApiRequest.created_at.desc(), ApiRequest.id.desc()),
    )
    return list(result.scalars().all())


async def _get_owned_request(
    db: AsyncSession, request_id: UUID, user_id: UUID,
) -> ApiRequest:
    api = await db.get(ApiRequest, request_id)
    if api is None:
        raise ResourceNotFoundError("Request", str(request_id))
    await require_owned_collection(db, api.collection_id, user_id)
    return api


async def update_request(
    db: AsyncSession, request_id: UUID, user_id: UUID, patch: dict[str, Any],
) -> ApiRequest:
    api = await _get_owned_request(db, request_id, user_id)
    for field, value in patch.items():
        setattr(api, field, value)
    await db.commit()
    await db.refresh(api)
    return api


async def delete_request(
    db: AsyncSession, request_id: UUID, user_id: UUID,
) -> None:
    api = await _get_owned_request(db, request_id, user_id)
    await db.delete(api)
    await db.commit()
    logger.info("Request deleted", extra={"request_id": str(request_id)})
