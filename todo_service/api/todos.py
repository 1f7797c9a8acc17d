"""
Todo 数据接口 + 功能开关接口

端点：
- POST   /create          — 创建 Todo（201）
- GET    /todos           — 列出全部 Todo
- PUT    /complete?id=    — 标记完成
- DELETE /delete?id=      — 删除
- POST   /toggleflag      — 切换功能开关（不受开关控制）

数据接口的业务逻辑全部在 TodoService 内，这里只负责取参数和序列化。
同步处理函数由 Starlette 线程池执行，临界区互斥由 TodoService 的锁保证。
"""

from fastapi import APIRouter, Depends, Request, Response
from fastapi.concurrency import run_in_threadpool

from todo_service.api.deps import get_todo_service
from todo_service.todo import Todo, TodoService

router = APIRouter(tags=["Todo"])


@router.post("/create", status_code=201, response_model=Todo)
async def create_todo(request: Request, service: TodoService = Depends(get_todo_service)):
    """创建 Todo：先检查开关，再读取请求体"""
    service.gate("create")
    payload = await request.body()
    return await run_in_threadpool(service.create, payload)


@router.get("/todos", response_model=list[Todo])
def list_todos(service: TodoService = Depends(get_todo_service)):
    return service.list_all()


# id 以原始字符串接收，缺失 / 非整数由 TodoService 统一判定为 400
@router.put("/complete", response_model=Todo)
def complete_todo(id: str | None = None, service: TodoService = Depends(get_todo_service)):
    """标记完成"""
    return service.complete(id)


@router.delete("/delete", response_model=Todo)
def delete_todo(id: str | None = None, service: TodoService = Depends(get_todo_service)):
    """删除并返回被删除的记录"""
    return service.delete(id)


@router.post("/toggleflag")
def toggle_flag(service: TodoService = Depends(get_todo_service)):
    """切换功能开关，成功返回 200 空响应体"""
    service.toggle_flag()
    return Response(status_code=200)
