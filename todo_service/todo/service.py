"""
TodoService：内存 Todo 存储 + 四个数据操作

状态归属于实例（有序列表 + 自增 id 计数器 + 一把互斥锁 + 功能开关），
由应用工厂创建后注入到请求处理函数，不使用模块级全局变量。

每个数据操作的顺序固定：
1. 检查功能开关（不持锁）
2. 解析输入（不持锁）
3. 持锁执行读取 / 修改，临界区内不做任何 I/O
4. 释放锁后返回记录副本，由调用方序列化

查找按插入顺序线性扫描，命中判断使用显式的"是否找到"，不依赖 id == 0 之类的哨兵值。
"""

import functools
import re
import threading
from collections.abc import Callable
from typing import TypeVar

import structlog
from pydantic import ValidationError

from todo_service.observability.metrics import OPERATION_TOTAL
from todo_service.todo.errors import (
    FeatureDisabledError,
    MalformedInputError,
    TodoNotFoundError,
    TodoServiceError,
)
from todo_service.todo.flag import FlagGate
from todo_service.todo.schemas import STATUS_COMPLETE, STATUS_INCOMPLETE, Todo, TodoCreate

log = structlog.get_logger()

T = TypeVar("T")

_ID_PATTERN = re.compile(r"[+-]?[0-9]+")

# 与存储 id 相同的 64 位有符号整数范围
_ID_MIN = -(2**63)
_ID_MAX = 2**63 - 1


def _record_rejection(operation: str, exc: TodoServiceError) -> None:
    OPERATION_TOTAL.labels(operation=operation, result=exc.reason).inc()
    log.warning("Todo 操作被拒绝", operation=operation, reason=exc.reason, error=exc.message)


def _tracked(operation: str) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """记录操作结果到 todo_operation_total"""

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> T:
            try:
                result = func(*args, **kwargs)
            except TodoServiceError as e:
                _record_rejection(operation, e)
                raise
            OPERATION_TOTAL.labels(operation=operation, result="ok").inc()
            return result

        return wrapper

    return decorator


def parse_todo_id(raw_id: str | None) -> int:
    """解析查询参数中的 id：缺失或非整数时抛出 MalformedInputError"""
    if not raw_id:
        raise MalformedInputError("Missing todo ID parameter")
    if not _ID_PATTERN.fullmatch(raw_id):
        raise MalformedInputError("Invalid todo ID parameter")
    try:
        todo_id = int(raw_id)
    except ValueError as e:
        # 超长数字串超出解释器的整数转换上限
        raise MalformedInputError("Invalid todo ID parameter", cause=e) from e
    if not _ID_MIN <= todo_id <= _ID_MAX:
        raise MalformedInputError("Invalid todo ID parameter")
    return todo_id


class TodoService:
    """进程内 Todo 存储及其数据操作"""

    def __init__(self, first_id: int = 1, flag: FlagGate | None = None):
        if first_id < 1:
            raise ValueError("first_id 必须 >= 1")
        self.flag = flag or FlagGate()
        self._todos: list[Todo] = []
        self._next_id = first_id
        self._lock = threading.Lock()

    # ── 数据操作（均受功能开关控制） ──

    def gate(self, operation: str) -> None:
        """仅检查功能开关，供需要在读取请求体之前拒绝请求的调用方使用"""
        try:
            self.flag.ensure_enabled()
        except FeatureDisabledError as e:
            _record_rejection(operation, e)
            raise

    @_tracked("create")
    def create(self, payload: bytes | str) -> Todo:
        """解析 JSON 请求体并追加一条新 Todo，返回创建后的记录"""
        self.flag.ensure_enabled()

        try:
            body = TodoCreate.model_validate_json(payload)
        except ValidationError as e:
            raise MalformedInputError("Invalid request data", cause=e) from e

        with self._lock:
            todo = Todo(id=self._next_id, title=body.title, status=STATUS_INCOMPLETE)
            self._next_id += 1
            self._todos.append(todo)

        log.info("Todo 已创建", todo_id=todo.id, title=todo.title)
        return todo.model_copy()

    @_tracked("list")
    def list_all(self) -> list[Todo]:
        """返回全部 Todo 的快照（按插入顺序）"""
        self.flag.ensure_enabled()

        with self._lock:
            return [todo.model_copy() for todo in self._todos]

    @_tracked("complete")
    def complete(self, raw_id: str | None) -> Todo:
        """将首个匹配 id 的 Todo 标记为 Complete，返回更新后的记录"""
        self.flag.ensure_enabled()
        todo_id = parse_todo_id(raw_id)

        with self._lock:
            index = self._find_index(todo_id)
            if index is None:
                raise TodoNotFoundError()
            todo = self._todos[index]
            todo.status = STATUS_COMPLETE
            updated = todo.model_copy()

        log.info("Todo 已完成", todo_id=updated.id)
        return updated

    @_tracked("delete")
    def delete(self, raw_id: str | None) -> Todo:
        """删除首个匹配 id 的 Todo，其余记录保持原有顺序，返回被删除的记录"""
        self.flag.ensure_enabled()
        todo_id = parse_todo_id(raw_id)

        with self._lock:
            index = self._find_index(todo_id)
            if index is None:
                raise TodoNotFoundError()
            deleted = self._todos.pop(index)

        log.info("Todo 已删除", todo_id=deleted.id)
        return deleted

    # ── 开关操作（不受开关控制） ──

    @_tracked("toggle_flag")
    def toggle_flag(self) -> bool:
        return self.flag.toggle()

    # ── 内部方法 ──

    def count(self) -> int:
        with self._lock:
            return len(self._todos)

    def _find_index(self, todo_id: int) -> int | None:
        """线性扫描，返回首个匹配的下标；调用方必须已持有锁"""
        for i, todo in enumerate(self._todos):
            if todo.id == todo_id:
                return i
        return None
