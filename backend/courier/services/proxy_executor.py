"""Proxy Executor — performs one outbound HTTP call and normalizes every outcome.

Invariants:
    - Validation (core/proxy_request.py) completes before any network IO
    - Any HTTP response, whatever its status, is a successful proxy operation:
      success=True with status/headers/body passed through verbatim
    - No response at all (connect/DNS failure, timeout, protocol failure) → NetworkError (503),
      never carries a status_code
    - Anything else unexpected → ProxyInternalError (500); detail logged, not returned
    - timeout_seconds bounds the whole call, redirects and body download included;
      no retries; nothing persisted
    - metadata size counts body bytes as received, before content decoding

Design Decisions:
    - Fresh AsyncClient per call: no cookies or connection state leak between users
    - trust_env=False: HTTP_PROXY/NETRC of the server process never apply to user calls
    - transport is injectable so tests can stand in for remote servers (httpx.MockTransport)
"""

import asyncio
import json
import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any
from urllib.parse import urlsplit

import httpx

from courier.core.errors import (
    ErrorContext, InputValidationError, NetworkError, ProxyInternalError,
)
from courier.core.proxy_request import OutboundRequest, build_outbound_request

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProxyResponse:
    """Normalized result of a call that reached the remote server."""
    status_code: int
    status_text: str
    headers: dict[str, str]
    data: Any
    duration_ms: int
    size: int
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_response(self) -> dict:
        return {
            "success": True,
            "status_code": self.status_code,
            "status_text": self.status_text,
            "headers": self.headers,
            "data": self.data,
            "metadata": {
                "duration": f"{self.duration_ms}ms",
                "duration_ms": self.duration_ms,
                "size": self.size,
                "timestamp": self.timestamp.isoformat(),
            },
        }


def _redact(url: str) -> str:
    """Scheme, host and path only: no credentials, no query string."""
    parts = urlsplit(url)
    host = parts.hostname or ""
    if parts.port:
        host = f"{host}:{parts.port}"
    return f"{parts.scheme}://{host}{parts.path}"


def _decode_body(response: httpx.Response) -> Any:
    """Parsed JSON when the body is JSON, text otherwise."""
    if not response.content:
        return ""
    text = response.text
    try:
        return json.loads(text)
    except ValueError:
        return text


def _network_code(exc: httpx.RequestError) -> str:
    if isinstance(exc, httpx.TimeoutException):
        return "TIMEOUT"
    if isinstance(exc, httpx.ConnectError):
        return "CONNECTION_FAILED"
    if isinstance(exc, httpx.TooManyRedirects):
        return "TOO_MANY_REDIRECTS"
    return "NETWORK_ERROR"


class ProxyExecutor:
    """Executes user-described HTTP calls against arbitrary servers."""

    def __init__(
        self,
        timeout_seconds: float = 30.0,
        max_redirects: int = 5,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.timeout_seconds = timeout_seconds
        self.max_redirects = max_redirects
        self._transport = transport

    async def execute(
        self,
        url: str | None,
        method: str | None,
        headers: dict[str, str] | None = None,
        auth: Any = None,
        body: Any = None,
        user_id: str | None = None,
    ) -> ProxyResponse:
        outbound = build_outbound_request(url, method, headers, auth, body)
        log_extra = {
            "user_id": user_id,
            "method": outbound.method.value,
            "target_url": _redact(outbound.url),
        }

        try:
            response, duration_ms = await self._dispatch(outbound)
        except httpx.InvalidURL:
            raise InputValidationError("Invalid URL format", field="url")
        except httpx.RequestError as e:
            code = _network_code(e)
            logger.warning(
                f"Proxy target unreachable: {type(e).__name__}",
                extra={**log_extra, "network_code": code},
            )
            raise NetworkError(
                str(e) or type(e).__name__, code,
                context=ErrorContext(user_id=user_id),
            )
        except TimeoutError:
            logger.warning(
                f"Proxy call exceeded {self.timeout_seconds}s",
                extra={**log_extra, "network_code": "TIMEOUT"},
            )
            raise NetworkError(
                f"Request timed out after {self.timeout_seconds}s", "TIMEOUT",
                context=ErrorContext(user_id=user_id),
            )
        except Exception as e:
            logger.error(
                f"Proxy execution failed: {e}", extra=log_extra, exc_info=True,
            )
            raise ProxyInternalError(
                context=ErrorContext(user_id=user_id, debug_info={"error": repr(e)}),
            )

        result = ProxyResponse(
            status_code=response.status_code,
            status_text=(
                response.reason_phrase
                or httpx.codes.get_reason_phrase(response.status_code)
            ),
            headers=dict(response.headers),
            data=_decode_body(response),
            duration_ms=duration_ms,
            size=response.num_bytes_downloaded,
        )
        logger.info(
            "Proxy call completed",
            extra={
                **log_extra,
                "status_code": result.status_code,
                "duration_ms": duration_ms,
            },
        )
        return result

    async def _dispatch(self, outbound: OutboundRequest) -> tuple[httpx.Response, int]:
        kwargs: dict[str, Any] = {"headers": outbound.headers}
        if outbound.basic_auth is not None:
            kwargs["auth"] = httpx.BasicAuth(*outbound.basic_auth)
        if outbound.json_body is not None:
            kwargs["json"] = outbound.json_body
        elif outbound.content is not None:
            kwargs["content"] = outbound.content

        async with httpx.AsyncClient(
            timeout=self.timeout_seconds,
            follow_redirects=True,
            max_redirects=self.max_redirects,
            trust_env=False,
            transport=self._transport,
        ) as client:
            started = time.perf_counter()
            # httpx timeouts are per phase and per hop; this caps the total
            async with asyncio.timeout(self.timeout_seconds):
                response = await client.request(
                    outbound.method.value, outbound.url, **kwargs,
                )
            duration_ms = round((time.perf_counter() - started) * 1000)
        return response, duration_ms
