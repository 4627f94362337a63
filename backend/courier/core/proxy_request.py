"""Proxy Request Builder — validates a client call description into an OutboundRequest.

Invariants:
    - Validation order is fixed: url → method → auth → body; first failure wins
    - Every failure is an InputValidationError with a distinct message, raised before
      any network IO
    - Auth is a closed sum type (BearerAuth | ApiKeyAuth | BasicAuth); unknown tags are rejected
    - api_key auth overwrites a caller header of the same name (case-insensitive, last write wins)
    - basic auth is carried as credentials for the HTTP client to encode, never as a
      hand-built Authorization header
    - Header names and values must be ASCII without CR/LF (including api_key headers)
    - Body is kept only for POST/PUT/PATCH; silently dropped otherwise

Design Decisions:
    - Pure module (no httpx import): the shell turns OutboundRequest into a real call
    - Frozen dataclasses: an OutboundRequest cannot be mutated between validation and dispatch
"""

from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlsplit

from courier.core.domain_types import AuthType, BODY_METHODS, HttpMethod
from courier.core.errors import InputValidationError

_ALLOWED_SCHEMES = ("http", "https")
_INVALID_AUTH_MESSAGE = "Invalid auth type. Must be: bearer, api_key, or basic"
_HEADER_NAME_FORBIDDEN = set(" \t\r\n:")


# ─── Auth Variant ────────────────────────────────────────────────

@dataclass(frozen=True)
class BearerAuth:
    token: str


@dataclass(frozen=True)
class ApiKeyAuth:
    key: str
    value: str


@dataclass(frozen=True)
class BasicAuth:
    username: str
    password: str = field(repr=False)


ProxyAuth = BearerAuth | ApiKeyAuth | BasicAuth


def _text(raw: dict, name: str) -> str:
    value = raw.get(name)
    return value if isinstance(value, str) else ""


def parse_auth(raw: Any) -> ProxyAuth:
    """Parse the client auth object into its variant, validating required fields."""
    if not isinstance(raw, dict):
        raise InputValidationError(_INVALID_AUTH_MESSAGE, field="auth")
    try:
        auth_type = AuthType(raw.get("type"))
    except ValueError:
        raise InputValidationError(_INVALID_AUTH_MESSAGE, field="auth.type")

    match auth_type:
        case AuthType.BEARER:
            token = _text(raw, "token").strip()
            if not token:
                raise InputValidationError(
                    "Bearer token is required for bearer auth", field="auth.token",
                )
            return BearerAuth(token=token)
        case AuthType.API_KEY:
            key = _text(raw, "key").strip()
            value = _text(raw, "value")
            if not key or not value.strip():
                raise InputValidationError(
                    "API key name and value are required for API key auth",
                    field="auth.key",
                )
            return ApiKeyAuth(key=key, value=value)
        case AuthType.BASIC:
            username = _text(raw, "username")
            password = _text(raw, "password")
            if not username.strip() or not password:
                raise InputValidationError(
                    "Username and password are required for basic auth",
                    field="auth.username",
                )
            return BasicAuth(username=username, password=password)


# ─── Outbound Request ────────────────────────────────────────────

@dataclass(frozen=True)
class OutboundRequest:
    """A fully validated call, ready for dispatch."""
    url: str
    method: HttpMethod
    headers: dict[str, str] = field(default_factory=dict)
    basic_auth: tuple[str, str] | None = field(default=None, repr=False)
    json_body: Any = None
    content: str | None = None

    @property
    def has_body(self) -> bool:
        return self.json_body is not None or self.content is not None


def validate_url(url: str | None) -> str:
    """Require a non-blank absolute http(s) URL with a host."""
    if not isinstance(url, str) or not url.strip():
        raise InputValidationError("URL is required", field="url")
    url = url.strip()
    try:
        parts = urlsplit(url)
        hostname = parts.hostname
        parts.port  # raises ValueError on a non-numeric or out-of-range port
    except ValueError:
        raise InputValidationError("Invalid URL format", field="url")
    if parts.scheme.lower() not in _ALLOWED_SCHEMES or not hostname:
        raise InputValidationError("Invalid URL format", field="url")
    return url


def validate_method(method: str | None) -> HttpMethod:
    """Require one of the supported methods, case-insensitively."""
    if not isinstance(method, str) or not method.strip():
        raise InputValidationError("Method is required", field="method")
    try:
        return HttpMethod(method.strip().upper())
    except ValueError:
        allowed = ", ".join(m.value for m in HttpMethod)
        raise InputValidationError(
            f"Invalid HTTP method. Must be one of: {allowed}", field="method",
        )


def set_header(headers: dict[str, str], name: str, value: str) -> None:
    """Set a header, replacing any existing one whose name differs only in case."""
    for existing in [h for h in headers if h.lower() == name.lower()]:
        del headers[existing]
    headers[name] = value


def _encodes(text: str, encoding: str) -> bool:
    try:
        text.encode(encoding)
    except UnicodeEncodeError:
        return False
    return True


def _check_headers(headers: dict[str, str]) -> None:
    # httpx encodes outgoing header names and values as ASCII
    for name, value in headers.items():
        if not name or _HEADER_NAME_FORBIDDEN & set(name) or not _encodes(name, "ascii"):
            raise InputValidationError(f"Invalid header name: {name!r}", field="headers")
        if "\r" in value or "\n" in value or not _encodes(value, "ascii"):
            raise InputValidationError(f"Invalid value for header {name!r}", field="headers")


def build_outbound_request(
    url: str | None,
    method: str | None,
    headers: dict[str, str] | None = None,
    auth: Any = None,
    body: Any = None,
) -> OutboundRequest:
    """Validate and normalize a client call description."""
    clean_url = validate_url(url)
    http_method = validate_method(method)
    merged = dict(headers or {})

    basic_auth = None
    if auth is not None:
        match parse_auth(auth):
            case BearerAuth(token=token):
                set_header(merged, "Authorization", f"Bearer {token}")
            case ApiKeyAuth(key=key, value=value):
                set_header(merged, key, value)
            case BasicAuth(username=username, password=password):
                basic_auth = (username, password)

    _check_headers(merged)

    json_body = content = None
    if http_method in BODY_METHODS and body is not None:
        if isinstance(body, str):
            content = body
        else:
            json_body = body

    return OutboundRequest(
        url=clean_url,
        method=http_method,
        headers=merged,
        basic_auth=basic_auth,
        json_body=json_body,
        content=content,
    )
