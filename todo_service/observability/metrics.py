"""
Prometheus 指标定义

所有指标统一在此文件定义，中间件和业务代码按需引用。
"""

from prometheus_client import Counter, Gauge, Histogram

# ── 请求级指标 ──

REQUEST_TOTAL = Counter(
    "todo_request_total",
    "HTTP 请求总数",
    ["method", "endpoint", "status_code"],
)

REQUEST_DURATION = Histogram(
    "todo_request_duration_ms",
    "HTTP 请求耗时（毫秒）",
    ["method", "endpoint"],
    buckets=[1, 5, 10, 25, 50, 100, 250, 500, 1000],
)

# ── 业务指标 ──

OPERATION_TOTAL = Counter(
    "todo_operation_total",
    "Todo 操作总数",
    ["operation", "result"],  # result: ok/disabled/malformed/not_found
)

FLAG_ENABLED = Gauge(
    "todo_flag_enabled",
    "功能开关状态（1=开启，0=关闭）",
)

TODO_ITEMS = Gauge(
    "todo_items",
    "当前存储的 Todo 条数",
)
