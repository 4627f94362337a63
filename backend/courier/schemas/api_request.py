"""APIRequest Schemas — saved request payloads with merge-patch update semantics.

Invariants:
    - name, url, method required and non-blank on create; method upper-cased
    - authentication is a tagged variant (bearer | api_key | basic); unknown tags rejected
    - Update is a merge-patch: only fields present in the payload are written.
      Explicit null clears headers/authentication/body and is rejected for name/url/method

Design Decisions:
    - Saved auth fields may be blank (templates are edited over time); the proxy
      executor enforces non-blank credentials at execution time
    - model_fields_set tells "omitted" apart from "sent as null"
"""

from datetime import datetime
from typing import Annotated, Any, Literal, Union
from uuid import UUID

from pydantic import (
    BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator,
)

_REQUIRED_FIELDS = ("name", "url", "method")


class BearerAuthConfig(BaseModel):
    type: Literal["bearer"]
    token: str = ""


class ApiKeyAuthConfig(BaseModel):
    type: Literal["api_key"]
    key: str = ""
    value: str = ""


class BasicAuthConfig(BaseModel):
    type: Literal["basic"]
    username: str = ""
    password: str = ""


SavedAuth = Annotated[
    Union[BearerAuthConfig, ApiKeyAuthConfig, BasicAuthConfig],
    Field(discriminator="type"),
]


def _clean(name: str, v: str | None) -> str | None:
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError(f"{name} cannot be empty or whitespace")
    return v.upper() if name == "method" else v


class ApiRequestCreate(BaseModel):
    name: str = Field(max_length=255)
    url: str
    method: str = Field(max_length=10)
    headers: dict[str, str] | None = None
    authentication: SavedAuth | None = None
    body: Any = None

    @field_validator(*_REQUIRED_FIELDS)
    @classmethod
    def strip_required(cls, v: str, info: ValidationInfo) -> str:
        return _clean(info.field_name, v)


class ApiRequestUpdate(BaseModel):
    name: str | None = Field(None, max_length=255)
    url: str | None = None
    method: str | None = Field(None, max_length=10)
    headers: dict[str, str] | None = None
    authentication: SavedAuth | None = None
    body: Any = None

    @field_validator(*_REQUIRED_FIELDS)
    @classmethod
    def strip_required(cls, v: str | None, info: ValidationInfo) -> str | None:
        return _clean(info.field_name, v)

    @model_validator(mode="after")
    def reject_null_required(self):
        for name in _REQUIRED_FIELDS:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def to_patch(self) -> dict[str, Any]:
        """Fields the caller actually sent, ready to assign onto the row."""
        patch = self.model_dump(exclude_unset=True)
        if self.authentication is not None:
            patch["authentication"] = self.authentication.model_dump()
        return patch


class ApiRequestResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    url: str
    method: str
    headers: dict[str, str] | None = None
    authentication: dict[str, Any] | None = None
    body: Any = None
    collection_id: UUID
    created_at: datetime
    updated_at: datetime
