"""Collection Routes — ownership isolation, ordering, cascade delete."""

from uuid import uuid4


async def test_collection_routes_require_session(client):
    assert (await client.get("/api/collections")).status_code == 401
    assert (await client.post("/api/collections", json={"name": "x"})).status_code == 401


async def test_create_collection(alice):
    res = await alice.post("/api/collections", json={"name": "  Payments  "})
    assert res.status_code == 201
    collection = res.json()["collection"]
    assert collection["name"] == "Payments"
    me = (await alice.get("/api/auth/me")).json()["user"]
    assert collection["user_id"] == me["id"]


async def test_create_collection_requires_name(alice):
    res = await alice.post("/api/collections", json={"name": "   "})
    assert res.status_code == 400


async def test_owner_id_in_body_is_ignored(alice, bob):
    bob_id = (await bob.get("/api/auth/me")).json()["user"]["id"]
    res = await alice.post("/api/collections", json={"name": "Sneaky", "user_id": bob_id})
    assert res.json()["collection"]["user_id"] != bob_id
    assert (await bob.get("/api/collections")).json()["count"] == 0


async def test_list_is_newest_first_with_counts_and_stable(alice, alice_request):
    for name in ("second", "third"):
        await alice.post("/api/collections", json={"name": name})

    first = (await alice.get("/api/collections")).json()
    second = (await alice.get("/api/collections")).json()
    assert first == second
    assert first["count"] == 3
    assert [c["name"] for c in first["collections"]] == ["third", "second", "Alice APIs"]
    counts = {c["name"]: c["request_count"] for c in first["collections"]}
    assert counts == {"third": 0, "second": 0, "Alice APIs": 1}


async def test_list_only_shows_own_collections(alice_collection, bob):
    res = await bob.get("/api/collections")
    assert res.json() == {
        "message": "Collections retrieved successfully", "collections": [], "count": 0,
    }


async def test_get_collection_nests_requests(alice, alice_collection, alice_request):
    res = await alice.get(f"/api/collections/{alice_collection['id']}")
    assert res.status_code == 200
    requests = res.json()["collection"]["requests"]
    assert [r["id"] for r in requests] == [alice_request["id"]]


async def test_other_user_is_forbidden(alice_collection, bob):
    cid = alice_collection["id"]
    assert (await bob.get(f"/api/collections/{cid}")).status_code == 403
    assert (await bob.put(f"/api/collections/{cid}", json={"name": "mine"})).status_code == 403
    assert (await bob.delete(f"/api/collections/{cid}")).status_code == 403


async def test_forbidden_attempts_change_nothing(alice, alice_collection, bob):
    cid = alice_collection["id"]
    await bob.put(f"/api/collections/{cid}", json={"name": "hijacked"})
    await bob.delete(f"/api/collections/{cid}")
    res = await alice.get(f"/api/collections/{cid}")
    assert res.json()["collection"]["name"] == "Alice APIs"


async def test_unknown_collection_is_404(alice):
    res = await alice.get(f"/api/collections/{uuid4()}")
    assert res.status_code == 404
    assert res.json()["message"] == "Collection not found"


async def test_malformed_id_is_400(alice):
    assert (await alice.get("/api/collections/not-a-uuid")).status_code == 400


async def test_rename_collection(alice, alice_collection):
    cid = alice_collection["id"]
    res = await alice.put(f"/api/collections/{cid}", json={"name": "Renamed"})
    assert res.status_code == 200
    assert res.json()["collection"]["name"] == "Renamed"


async def test_rename_requires_name(alice, alice_collection):
    res = await alice.put(f"/api/collections/{alice_collection['id']}", json={"name": ""})
    assert res.status_code == 400


async def test_delete_cascades_to_requests(alice, alice_collection, alice_request):
    cid = alice_collection["id"]
    res = await alice.delete(f"/api/collections/{cid}")
    assert res.status_code == 200
    assert (await alice.get(f"/api/collections/{cid}")).status_code == 404
    gone = await alice.put(f"/api/requests/{alice_request['id']}", json={"name": "x"})
    assert gone.status_code == 404
