"""
Todo 模块：内存 Todo 存储 + 功能开关

提供 TodoService（存储与四个数据操作）、FlagGate（全局开关）
以及 Todo / TodoCreate schema，供 API 层注入使用。
"""

from todo_service.todo.errors import (
    FeatureDisabledError,
    MalformedInputError,
    TodoNotFoundError,
    TodoServiceError,
)
from todo_service.todo.flag import FlagGate
from todo_service.todo.schemas import Todo, TodoCreate
from todo_service.todo.service import TodoService

__all__ = [
    "FeatureDisabledError",
    "FlagGate",
    "MalformedInputError",
    "Todo",
    "TodoCreate",
    "TodoNotFoundError",
    "TodoService",
    "TodoServiceError",
]
