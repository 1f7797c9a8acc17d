"""
健康检查接口：探活 + 开关状态
"""

from fastapi import APIRouter, Depends

from todo_service.api.deps import get_todo_service
from todo_service.todo import TodoService

router = APIRouter(tags=["健康检查"])


@router.get("/health")
def health_check(service: TodoService = Depends(get_todo_service)):
    """健康检查：不受功能开关控制"""
    return {
        "status": "ok",
        "flag": "enabled" if service.flag.is_enabled() else "disabled",
        "todos": service.count(),
    }
