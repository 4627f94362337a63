"""Credential Primitives — bcrypt hashing and session token round-trips."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import jwt
import pytest

from courier.core.errors import AuthenticationError
from courier.infrastructure.security import PasswordHasher, SessionTokenIssuer

SECRET = "unit-test-secret"


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)


@pytest.fixture
def issuer():
    return SessionTokenIssuer(SECRET, ttl=timedelta(hours=24))


async def test_hash_is_salted_and_not_plaintext(hasher):
    first = await hasher.hash("s3cret")
    second = await hasher.hash("s3cret")
    assert first != second
    assert "s3cret" not in first
    assert first.startswith("$2b$04$")


async def test_verify_accepts_only_matching_password(hasher):
    hashed = await hasher.hash("s3cret")
    assert await hasher.verify("s3cret", hashed)
    assert not await hasher.verify("S3cret", hashed)


async def test_verify_handles_malformed_hash(hasher):
    assert not await hasher.verify("s3cret", "not-a-bcrypt-hash")


async def test_verify_missing_is_always_false(hasher):
    assert await hasher.verify_missing("courier-timing-equalizer") is False


def test_token_round_trip(issuer):
    user_id = uuid4()
    assert issuer.decode(issuer.issue(user_id)) == user_id


def test_token_expires_after_ttl(issuer):
    issued = datetime.now(timezone.utc) - timedelta(hours=25)
    token = issuer.issue(uuid4(), now=issued)
    with pytest.raises(AuthenticationError, match="expired"):
        issuer.decode(token)


def test_token_carries_24h_expiry(issuer):
    now = datetime.now(timezone.utc).replace(microsecond=0)
    claims = jwt.decode(issuer.issue(uuid4(), now=now), SECRET, algorithms=["HS256"])
    assert claims["exp"] - claims["iat"] == 24 * 3600


def test_token_from_other_secret_rejected(issuer):
    foreign = SessionTokenIssuer("another-secret").issue(uuid4())
    with pytest.raises(AuthenticationError):
        issuer.decode(foreign)


@pytest.mark.parametrize("token", [None, "", "garbage", "a.b.c"])
def test_absent_or_malformed_token_rejected(issuer, token):
    with pytest.raises(AuthenticationError):
        issuer.decode(token)


def test_token_with_non_uuid_subject_rejected(issuer):
    now = datetime.now(timezone.utc)
    token = jwt.encode(
        {"sub": "42", "iat": now, "exp": now + timedelta(hours=1)}, SECRET, algorithm="HS256",
    )
    with pytest.raises(AuthenticationError):
        issuer.decode(token)


def test_issuer_requires_secret():
    with pytest.raises(RuntimeError):
        SessionTokenIssuer("")
