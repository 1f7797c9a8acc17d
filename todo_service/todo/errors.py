"""
Todo 服务的应用级异常

每个异常携带对应的 HTTP 状态码和纯文本提示，由 API 层统一转换为响应；
reason 用作指标标签。
"""


class TodoServiceError(Exception):
    """Todo 服务异常基类"""

    status_code: int = 500
    reason: str = "error"
    message: str = "Internal server error"

    def __init__(self, message: str | None = None, cause: Exception | None = None):
        super().__init__(message or self.message)
        self.message = message or self.message
        self.cause = cause


class FeatureDisabledError(TodoServiceError):
    """功能开关关闭，数据接口不可用"""

    status_code = 403
    reason = "disabled"
    message = "Endpoint disabled"


class MalformedInputError(TodoServiceError):
    """请求体无法解析，或 id 参数缺失 / 非整数"""

    status_code = 400
    reason = "malformed"
    message = "Invalid request data"


class TodoNotFoundError(TodoServiceError):
    status_code = 404
    reason = "not_found"
    message = "Todo not found"
