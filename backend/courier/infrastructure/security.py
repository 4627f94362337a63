"""Credential Primitives — bcrypt password hashing and signed session tokens.

Invariants:
    - Passwords are stored only as salted bcrypt hashes; comparison is bcrypt.checkpw
      (constant-time), never a plaintext compare
    - bcrypt work runs in a worker thread so the event loop keeps serving other requests
    - verify_missing() costs the same as a real verify, so "no such user" and
      "wrong password" take comparable time
    - Session tokens are HS256 JWTs with sub (user id), iat and exp; all three required
    - Any decode failure surfaces as AuthenticationError; the cause is logged at debug only

Design Decisions:
    - bcrypt over PBKDF2: tunable work factor (BCRYPT_ROUNDS, default 12)
    - PyJWT over a hand-rolled HMAC token: standard claims validation (exp, iat)
    - Secret and TTL are constructor arguments, taken from Settings by the caller
"""

import asyncio
import logging
from functools import lru_cache
from datetime import datetime, timedelta, timezone
from uuid import UUID

import bcrypt
import jwt

from courier.core.errors import AuthenticationError

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_PASSWORD_BYTES = 72
JWT_ALGORITHM = "HS256"


@lru_cache(maxsize=4)
def _dummy_hash(rounds: int) -> str:
    return bcrypt.hashpw(
        b"courier-timing-equalizer", bcrypt.gensalt(rounds=rounds),
    ).decode("utf-8")


class PasswordHasher:
    """Salted bcrypt hashing with a fixed work factor."""

    def __init__(self, rounds: int = 12):
        self.rounds = rounds

    def hash_sync(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify_sync(self, password: str, hashed: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
        except ValueError:
            # malformed stored hash or over-long password
            return False

    async def hash(self, password: str) -> str:
        return await asyncio.to_thread(self.hash_sync, password)

    async def verify(self, password: str, hashed: str) -> bool:
        return await asyncio.to_thread(self.verify_sync, password, hashed)

    async def verify_missing(self, password: str) -> bool:
        """Burn one comparison against a throwaway hash; always False."""
        dummy = await asyncio.to_thread(_dummy_hash, self.rounds)
        await self.verify(password, dummy)
        return False


class SessionTokenIssuer:
    """Issues and verifies stateless signed session tokens."""

    def __init__(self, secret: str, ttl: timedelta = timedelta(hours=24)):
        if not secret:
            raise RuntimeError("Session signing secret is not configured")
        self._secret = secret
        self.ttl = ttl

    def issue(self, user_id: UUID, now: datetime | None = None) -> str:
        now = now or datetime.now(timezone.utc)
        payload = {
            "sub": str(user_id),
            "iat": now,
            "exp": now + self.ttl,
        }
        return jwt.encode(payload, self._secret, algorithm=JWT_ALGORITHM)

    def decode(self, token: str | None) -> UUID:
        """Return the user id bound to the token or raise AuthenticationError."""
        if not token:
            raise AuthenticationError("Not authenticated")
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[JWT_ALGORITHM],
                options={"require": ["sub", "iat", "exp"]},
            )
            return UUID(payload["sub"])
        except jwt.ExpiredSignatureError:
            logger.debug("Session token expired")
            raise AuthenticationError("Invalid or expired token")
        except (jwt.InvalidTokenError, ValueError, TypeError) as e:
            logger.debug(f"Session token rejected: {type(e).__name__}")
            raise AuthenticationError("Invalid or expired token")
