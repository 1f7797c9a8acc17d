"""
Todo 数据模型

status 枚举与对外 JSON 保持一致：Incomplete / Complete。
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict

TodoStatus = Literal["Incomplete", "Complete"]

STATUS_INCOMPLETE: TodoStatus = "Incomplete"
STATUS_COMPLETE: TodoStatus = "Complete"


class Todo(BaseModel):
    """单个 Todo 条目（id 由服务端分配）"""

    id: int
    title: str
    status: TodoStatus = STATUS_INCOMPLETE


class TodoCreate(BaseModel):
    """创建请求体：只取 title，客户端传入的 id / status 一律忽略"""

    model_config = ConfigDict(extra="ignore")

    title: str
