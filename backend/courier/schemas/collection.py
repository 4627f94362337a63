"""Collection Schemas — create/update payloads and response shapes."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from courier.schemas.api_request import ApiRequestResponse


class CollectionWrite(BaseModel):
    """Create and rename share one payload: a non-blank name."""
    name: str = Field(max_length=255)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v


class CollectionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    user_id: UUID
    created_at: datetime
    updated_at: datetime


class CollectionSummary(CollectionResponse):
    request_count: int


class CollectionDetail(CollectionResponse):
    requests: list[ApiRequestResponse]
