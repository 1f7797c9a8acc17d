"""
FastAPI 依赖注入：从 app.state 取出当前应用持有的 TodoService
"""

from fastapi import Request

from todo_service.todo import TodoService


def get_todo_service(request: Request) -> TodoService:
    """FastAPI 依赖注入：获取 TodoService 实例"""
    return request.app.state.todo_service
