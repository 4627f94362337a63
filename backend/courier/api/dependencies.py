"""Route Dependencies — settings-bound components and session verification.

Invariants:
    - Components are built from the injected Settings, never from os.environ
    - get_current_user is the only way a route learns who the caller is; the user id
      it yields is the one ownership checks use
    - Session cookie: httponly, samesite=strict, max_age = session TTL, secure outside development

Design Decisions:
    - Cookie transport (not Authorization header) for browser clients with credentials
    - Tests override get_settings / get_proxy_executor through app.dependency_overrides
"""

from datetime import timedelta

from fastapi import Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from courier.config import Settings, get_settings
from courier.infrastructure.database import get_db
from courier.infrastructure.security import PasswordHasher, SessionTokenIssuer
from courier.models.user import User
from courier.services.auth_service import AuthService
from courier.services.proxy_executor import ProxyExecutor


def get_password_hasher(settings: Settings = Depends(get_settings)) -> PasswordHasher:
    return PasswordHasher(rounds=settings.bcrypt_rounds)


def get_token_issuer(settings: Settings = Depends(get_settings)) -> SessionTokenIssuer:
    return SessionTokenIssuer(
        settings.jwt_secret, ttl=timedelta(hours=settings.session_ttl_hours),
    )


def get_auth_service(
    db: AsyncSession = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
    issuer: SessionTokenIssuer = Depends(get_token_issuer),
) -> AuthService:
    return AuthService(db, hasher, issuer)


async def get_current_user(
    request: Request,
    settings: Settings = Depends(get_settings),
    auth: AuthService = Depends(get_auth_service),
) -> User:
    """Verify the session cookie; 401 when absent, invalid, expired or orphaned."""
    return await auth.resolve_session(
        request.cookies.get(settings.session_cookie_name),
    )


def get_proxy_executor(settings: Settings = Depends(get_settings)) -> ProxyExecutor:
    return ProxyExecutor(
        timeout_seconds=settings.proxy_timeout_seconds,
        max_redirects=settings.proxy_max_redirects,
    )


def set_session_cookie(response: Response, token: str, settings: Settings) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_ttl_hours * 3600,
        path="/",
        httponly=True,
        secure=settings.secure_cookies,
        samesite="strict",
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        key=settings.session_cookie_name,
        path="/",
        httponly=True,
        secure=settings.secure_cookies,
        samesite="strict",
    )
