"""Execute Schema — the loosely-typed proxy call description.

Fields are deliberately permissive: the proxy executor validates them in a fixed
order with a distinct message per failure (core/proxy_request.py).
"""

from typing import Any

from pydantic import BaseModel


class ExecuteRequest(BaseModel):
    url: str | None = None
    method: str | None = None
    headers: dict[str, str] | None = None
    auth: Any = None
    body: Any = None
