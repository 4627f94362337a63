"""Auth Schemas — registration/login payloads and the public user shape.

Invariants:
    - username, email: stripped, non-empty; email lower-cased
    - password: non-empty, never stripped, at most 72 UTF-8 bytes (bcrypt limit)
    - UserPublic never includes password_hash
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from courier.infrastructure.security import BCRYPT_MAX_PASSWORD_BYTES


def _strip_required(v: str, name: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError(f"{name} cannot be empty or whitespace")
    return v


class RegisterRequest(BaseModel):
    username: str = Field(max_length=255)
    password: str = Field(min_length=1)
    email: str = Field(max_length=320)

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        return _strip_required(v, "username")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return _strip_required(v, "email").lower()

    @field_validator("password")
    @classmethod
    def check_password(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("password cannot be empty or whitespace")
        if len(v.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
            raise ValueError(
                f"password cannot exceed {BCRYPT_MAX_PASSWORD_BYTES} bytes",
            )
        return v


class LoginRequest(BaseModel):
    email: str
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return _strip_required(v, "email").lower()


class UserPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    name: str
    created_at: datetime
    updated_at: datetime


class AuthResponse(BaseModel):
    message: str
    user: UserPublic
