"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId, CollectionId, ApiRequestId wrap UUIDs
    - HttpMethod lists exactly the methods the proxy may dispatch
    - Only POST/PUT/PATCH carry a request body (BODY_METHODS)
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)
CollectionId = NewType("CollectionId", UUID)
ApiRequestId = NewType("ApiRequestId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class HttpMethod(str, Enum):
    """Methods accepted by the proxy executor (dispatched upper-case)."""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"


class AuthType(str, Enum):
    """Tags of the proxy authentication variant."""
    BEARER = "bearer"
    API_KEY = "api_key"
    BASIC = "basic"


class OwnershipStatus(str, Enum):
    """Outcome of the ownership check on a collection."""
    OK = "ok"
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"


BODY_METHODS = frozenset({HttpMethod.POST, HttpMethod.PUT, HttpMethod.PATCH})
