"""Collection Service — nested request ordering matches the request listing."""

from datetime import datetime, timezone

from courier.models.api_request import ApiRequest
from courier.models.collection import Collection
from courier.models.user import User
from courier.services.api_request_service import list_requests
from courier.services.collection_service import get_collection


async def test_nested_requests_match_listing_on_timestamp_ties(test_db, test_session_factory):
    user = User(name="owner", email="owner@example.com", password_hash="x")
    test_db.add(user)
    await test_db.commit()
    collection = Collection(name="Tied", user_id=user.id)
    test_db.add(collection)
    await test_db.commit()

    same_moment = datetime(2024, 1, 1, tzinfo=timezone.utc)
    for i in range(5):
        test_db.add(ApiRequest(
            name=f"r{i}", url="https://api.example.com", method="GET",
            collection_id=collection.id, created_at=same_moment, updated_at=same_moment,
        ))
    await test_db.commit()

    async with test_session_factory() as db:
        listed = await list_requests(db, collection.id, user.id)
    async with test_session_factory() as db:
        nested = (await get_collection(db, collection.id, user.id)).requests

    assert [r.id for r in nested] == [r.id for r in listed]
    assert [r.id for r in listed] == sorted((r.id for r in listed), reverse=True)
