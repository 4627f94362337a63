"""Auth Routes — register, login, logout and the current session's user.

Invariants:
    - register/login set the session cookie on success only
    - Login failures are a uniform 401 "Invalid credentials"
    - Responses carry UserPublic, never the password hash
"""

import logging

from fastapi import APIRouter, Depends, Response, status

from courier.api.dependencies import (
    clear_session_cookie, get_auth_service, get_current_user, set_session_cookie,
)
from courier.config import Settings, get_settings
from courier.models.user import User
from courier.schemas.auth import AuthResponse, LoginRequest, RegisterRequest, UserPublic
from courier.services.auth_service import AuthService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post(
    "/register", response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    body: RegisterRequest,
    response: Response,
    auth: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_settings),
):
    """Create an account and start a session."""
    user, token = await auth.register(body)
    set_session_cookie(response, token, settings)
    return AuthResponse(
        message="Registered successfully", user=UserPublic.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    body: LoginRequest,
    response: Response,
    auth: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_settings),
):
    user, token = await auth.login(body)
    set_session_cookie(response, token, settings)
    return AuthResponse(
        message="Login successful", user=UserPublic.model_validate(user),
    )


@router.post("/logout")
async def logout(response: Response, settings: Settings = Depends(get_settings)):
    """Drop the session cookie. Tokens are stateless, so nothing is revoked server-side."""
    clear_session_cookie(response, settings)
    return {"message": "Logged out"}


@router.get("/me")
async def me(user: User = Depends(get_current_user)):
    return {"user": UserPublic.model_validate(user)}
