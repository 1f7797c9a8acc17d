"""
异常处理：把应用异常和框架 HTTP 异常统一转换为纯文本响应
"""

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from todo_service.todo import TodoServiceError

_METHOD_NOT_ALLOWED = "Invalid request method"


async def todo_error_handler(request: Request, exc: TodoServiceError) -> PlainTextResponse:
    # 供请求日志中间件记录拒绝原因
    request.state.rejection_reason = exc.reason
    return PlainTextResponse(exc.message, status_code=exc.status_code)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> PlainTextResponse:
    """路由不存在 / 方法不允许等框架异常，保留 Allow 等响应头"""
    request.state.rejection_reason = "method_not_allowed" if exc.status_code == 405 else "http_error"
    detail = _METHOD_NOT_ALLOWED if exc.status_code == 405 else str(exc.detail)
    return PlainTextResponse(detail, status_code=exc.status_code, headers=exc.headers)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TodoServiceError, todo_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
