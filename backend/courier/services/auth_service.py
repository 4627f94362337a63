"""Credential Store & Session Issuer — register, login and session resolution.

Invariants:
    - Duplicate email → ConflictError, and no second row is written
    - Login failure message is identical for unknown email and wrong password
    - Both login failure paths perform one bcrypt comparison
    - resolve_session never returns a user whose row no longer exists
"""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from courier.core.errors import AuthenticationError, ConflictError
from courier.infrastructure.security import PasswordHasher, SessionTokenIssuer
from courier.models.user import User
from courier.schemas.auth import LoginRequest, RegisterRequest

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


class AuthService:
    """Account operations bound to one database session."""

    def __init__(
        self, db: AsyncSession, hasher: PasswordHasher, issuer: SessionTokenIssuer,
    ):
        self.db = db
        self.hasher = hasher
        self.issuer = issuer

    async def _find_by_email(self, email: str) -> User | None:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def register(self, body: RegisterRequest) -> tuple[User, str]:
        if await self._find_by_email(body.email):
            raise ConflictError("User with this email already exists")

        user = User(
            name=body.username,
            email=body.email,
            password_hash=await self.hasher.hash(body.password),
        )
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            # lost a race against a concurrent registration for the same email
            await self.db.rollback()
            raise ConflictError("User with this email already exists")
        await self.db.refresh(user)
        logger.info("User registered", extra={"user_id": str(user.id)})
        return user, self.issuer.issue(user.id)

    async def login(self, body: LoginRequest) -> tuple[User, str]:
        user = await self._find_by_email(body.email)
        if user is None:
            await self.hasher.verify_missing(body.password)
            raise AuthenticationError(INVALID_CREDENTIALS)
        if not await self.hasher.verify(body.password, user.password_hash):
            raise AuthenticationError(INVALID_CREDENTIALS)
        logger.info("User logged in", extra={"user_id": str(user.id)})
        return user, self.issuer.issue(user.id)

    async def resolve_session(self, token: str | None) -> User:
        user_id: UUID = self.issuer.decode(token)
        user = await self.db.get(User, user_id)
        if user is None:
            raise AuthenticationError("User not found")
        return user
