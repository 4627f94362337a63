"""Execute Route — proxies one outbound HTTP call for the authenticated user.

Invariants:
    - 200 for any remote response (success=True, remote status passed through)
    - 400 validation, 503 unreachable, 500 unexpected: raised as CourierError
      subclasses and rendered by the global handler
"""

from fastapi import APIRouter, Depends

from courier.api.dependencies import get_current_user, get_proxy_executor
from courier.models.user import User
from courier.schemas.execute import ExecuteRequest
from courier.services.proxy_executor import ProxyExecutor

router = APIRouter(prefix="/api/execute", tags=["execute"])


@router.post("")
async def execute_request(
    body: ExecuteRequest,
    user: User = Depends(get_current_user),
    executor: ProxyExecutor = Depends(get_proxy_executor),
):
    result = await executor.execute(
        url=body.url,
        method=body.method,
        headers=body.headers,
        auth=body.auth,
        body=body.body,
        user_id=str(user.id),
    )
    return result.to_response()
