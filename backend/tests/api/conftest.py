"""API test fixtures — FastAPI app over ASGITransport with per-user clients.

Invariants:
    - get_db overridden to the per-test SQLite database
    - get_proxy_executor overridden to an executor whose transport is a MockTransport
      driven by the `remote` fixture; no test reaches a real server unless it builds
      its own executor
    - Each client carries at most one session cookie

Design Decisions:
    - Session cookie copied explicitly into each client's jar: independent of how the
      cookie jar treats the dotless test host
"""

from collections.abc import Callable

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

import courier.infrastructure.database as db_module
from courier.api.dependencies import get_proxy_executor
from courier.infrastructure.database import DatabaseSessionManager, get_db
from courier.main import app
from courier.services.proxy_executor import ProxyExecutor

PASSWORD = "correct horse battery staple"


class FakeRemote:
    """Configurable stand-in for the third-party server behind /api/execute."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.handler: Callable[[httpx.Request], httpx.Response] = (
            lambda request: httpx.Response(200, json={"ok": True})
        )

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)


@pytest.fixture
def remote():
    return FakeRemote()


@pytest.fixture
async def make_client(test_engine, test_session_factory, remote):
    """Factory of AsyncClients sharing one app and one test database."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_proxy_executor] = lambda: ProxyExecutor(
        timeout_seconds=5, transport=httpx.MockTransport(remote),
    )

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    clients: list[AsyncClient] = []

    def _make() -> AsyncClient:
        c = AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
        clients.append(c)
        return c

    yield _make

    for c in clients:
        await c.aclose()
    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def client(make_client):
    """Anonymous client."""
    return make_client()


def _session_token(response: httpx.Response) -> str:
    header = response.headers["set-cookie"]
    return header.split(";", 1)[0].split("=", 1)[1]


async def register_client(
    make_client, email: str, username: str = "tester",
) -> AsyncClient:
    c = make_client()
    res = await c.post(
        "/api/auth/register",
        json={"username": username, "email": email, "password": PASSWORD},
    )
    assert res.status_code == 201, res.text
    c.cookies.clear()
    c.cookies.set("token", _session_token(res))
    return c


@pytest.fixture
async def alice(make_client):
    return await register_client(make_client, "alice@example.com", "alice")


@pytest.fixture
async def bob(make_client):
    return await register_client(make_client, "bob@example.com", "bob")


@pytest.fixture
async def alice_collection(alice):
    res = await alice.post("/api/collections", json={"name": "Alice APIs"})
    assert res.status_code == 201, res.text
    return res.json()["collection"]


@pytest.fixture
async def alice_request(alice, alice_collection):
    res = await alice.post(
        f"/api/collections/{alice_collection['id']}/requests",
        json={
            "name": "List users",
            "url": "https://api.example.com/users",
            "method": "get",
            "headers": {"Accept": "application/json"},
            "authentication": {"type": "bearer", "token": "abc"},
        },
    )
    assert res.status_code == 201, res.text
    return res.json()["api"]


@pytest.fixture
def register(make_client):
    """Register an extra user and return a client holding their session."""
    async def _register(email: str, username: str = "tester") -> AsyncClient:
        return await register_client(make_client, email, username)
    return _register
