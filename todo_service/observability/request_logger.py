"""
请求日志中间件：trace_id 注入 + 每个请求一条结束日志

结束日志带上当时的功能开关状态；被拒绝的请求（4xx）记 warning，
并附带异常处理器写入 request.state 的拒绝原因（disabled / malformed / not_found）。
"""

import time

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from todo_service.observability.context import new_trace_id, trace_id_var

log = structlog.get_logger()


def _flag_state(request: Request) -> str:
    service = getattr(request.app.state, "todo_service", None)
    if service is None:
        return "unknown"
    return "enabled" if service.flag.is_enabled() else "disabled"


class RequestLoggerMiddleware(BaseHTTPMiddleware):
    """HTTP 请求日志 + trace_id 上下文注入"""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        trace_id = request.headers.get("X-Trace-ID") or new_trace_id()
        trace_id_var.set(trace_id)

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            trace_id=trace_id,
            method=request.method,
            path=request.url.path,
        )

        start = time.monotonic()
        response = await call_next(request)
        duration_ms = int((time.monotonic() - start) * 1000)

        fields = {
            "status_code": response.status_code,
            "duration_ms": duration_ms,
            "flag": _flag_state(request),
        }
        if 400 <= response.status_code < 500:
            reason = getattr(request.state, "rejection_reason", None) or "http_error"
            log.warning("请求被拒绝", reason=reason, **fields)
        else:
            log.info("请求完成", **fields)

        response.headers["X-Trace-ID"] = trace_id
        response.headers["X-Duration-Ms"] = str(duration_ms)

        return response
