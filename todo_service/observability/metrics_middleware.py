"""
请求级指标采集中间件

endpoint 标签取匹配到的路由模板，未匹配的路径统一记为 "unmatched"，
避免任意 URL 让 todo_request_total 的标签无限增长。
"""

import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from todo_service.observability.metrics import REQUEST_DURATION, REQUEST_TOTAL

UNMATCHED_ENDPOINT = "unmatched"


def endpoint_label(request: Request) -> str:
    """路由在 call_next 期间写入 scope["route"]，请求结束后读取"""
    route = request.scope.get("route")
    return getattr(route, "path", None) or UNMATCHED_ENDPOINT


class MetricsMiddleware(BaseHTTPMiddleware):
    """HTTP 请求指标采集（跳过 /metrics 与 /health）"""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.url.path.startswith("/metrics") or request.url.path == "/health":
            return await call_next(request)

        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000

        endpoint = endpoint_label(request)
        REQUEST_TOTAL.labels(
            method=request.method, endpoint=endpoint, status_code=str(response.status_code)
        ).inc()
        REQUEST_DURATION.labels(method=request.method, endpoint=endpoint).observe(duration_ms)

        return response
