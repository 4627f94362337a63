"""Auth Routes — cookies, status codes and the public user shape."""

PASSWORD = "correct horse battery staple"


async def test_register_returns_201_and_sets_session_cookie(client):
    res = await client.post(
        "/api/auth/register",
        json={"username": "ada", "email": "ada@example.com", "password": PASSWORD},
    )
    assert res.status_code == 201
    user = res.json()["user"]
    assert user["email"] == "ada@example.com"
    assert user["name"] == "ada"
    assert "password" not in user and "password_hash" not in user

    cookie = res.headers["set-cookie"].lower()
    assert cookie.startswith("token=")
    assert "httponly" in cookie
    assert "samesite=strict" in cookie
    assert "max-age=86400" in cookie
    assert "secure" not in cookie


async def test_register_duplicate_email_is_409(client, alice):
    res = await client.post(
        "/api/auth/register",
        json={"username": "again", "email": "alice@example.com", "password": PASSWORD},
    )
    assert res.status_code == 409
    assert res.json()["message"] == "User with this email already exists"


async def test_register_blank_field_is_400(client):
    res = await client.post(
        "/api/auth/register",
        json={"username": "  ", "email": "ada@example.com", "password": PASSWORD},
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_register_missing_field_is_400(client):
    res = await client.post("/api/auth/register", json={"email": "ada@example.com"})
    assert res.status_code == 400


async def test_login_sets_cookie(client, alice):
    res = await client.post(
        "/api/auth/login", json={"email": "alice@example.com", "password": PASSWORD},
    )
    assert res.status_code == 200
    assert res.json()["message"] == "Login successful"
    assert "token=" in res.headers["set-cookie"]


async def test_login_failures_are_uniform(client, alice):
    wrong = await client.post(
        "/api/auth/login", json={"email": "alice@example.com", "password": "wrong"},
    )
    unknown = await client.post(
        "/api/auth/login", json={"email": "nobody@example.com", "password": "wrong"},
    )
    assert wrong.status_code == unknown.status_code == 401
    assert wrong.json()["message"] == unknown.json()["message"] == "Invalid credentials"
    assert "set-cookie" not in wrong.headers


async def test_me_requires_session(client):
    res = await client.get("/api/auth/me")
    assert res.status_code == 401


async def test_me_returns_session_user(alice):
    res = await alice.get("/api/auth/me")
    assert res.status_code == 200
    assert res.json()["user"]["email"] == "alice@example.com"


async def test_tampered_cookie_is_rejected(make_client):
    c = make_client()
    c.cookies.set("token", "not.a.jwt")
    res = await c.get("/api/auth/me")
    assert res.status_code == 401
    assert res.json()["message"] == "Invalid or expired token"


async def test_logout_clears_cookie(alice):
    res = await alice.post("/api/auth/logout")
    assert res.status_code == 200
    cookie = res.headers["set-cookie"].lower()
    assert cookie.startswith("token=")
    assert "max-age=0" in cookie
