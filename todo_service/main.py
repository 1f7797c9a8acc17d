"""
FastAPI 应用主入口
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from prometheus_client import make_asgi_app

from todo_service import __version__
from todo_service.api.errors import register_exception_handlers
from todo_service.config import Settings, get_settings
from todo_service.observability.logging_config import setup_logging
from todo_service.observability.metrics import FLAG_ENABLED, TODO_ITEMS
from todo_service.observability.metrics_middleware import MetricsMiddleware
from todo_service.observability.request_logger import RequestLoggerMiddleware
from todo_service.todo import TodoService

settings = get_settings()

# 初始化日志（在 import 时就生效）
setup_logging(env=settings.ENV, level=settings.LOG_LEVEL)
log = structlog.get_logger()


@asynccontextmanager
async def lifespan(application: FastAPI):
    """应用生命周期：启动时强制关闭功能开关"""
    service: TodoService = application.state.todo_service
    log.info("应用启动", env=application.state.settings.ENV, app=application.title)

    # 数据接口默认关闭，需先调用 /toggleflag 开启
    service.flag.disable()

    # 由正在提供服务的应用发布存储规模与开关状态，采集时实时读取
    TODO_ITEMS.set_function(service.count)
    FLAG_ENABLED.set_function(lambda: int(service.flag.is_enabled()))

    yield

    log.info("应用关闭", todos=service.count())


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """应用工厂：每个应用持有独立的 TodoService 实例"""
    app_settings = app_settings or settings

    application = FastAPI(
        title=app_settings.APP_NAME,
        version=__version__,
        lifespan=lifespan,
    )
    application.state.settings = app_settings
    application.state.todo_service = TodoService(first_id=app_settings.TODO_FIRST_ID)

    register_exception_handlers(application)

    # ── 中间件（执行顺序：从下往上注册，从上往下执行） ──
    application.add_middleware(RequestLoggerMiddleware)
    application.add_middleware(MetricsMiddleware)

    # ── Prometheus 指标端点 ──
    application.mount("/metrics", make_asgi_app())

    # ── 路由注册 ──
    from todo_service.api.health import router as health_router
    from todo_service.api.todos import router as todos_router

    application.include_router(health_router)
    application.include_router(todos_router)

    return application


app = create_app()


def run() -> None:
    """单进程启动：状态只在内存中，不能开多 worker"""
    import uvicorn

    log.info("服务启动", host=settings.APP_HOST, port=settings.APP_PORT)
    uvicorn.run(app, host=settings.APP_HOST, port=settings.APP_PORT, workers=1)


if __name__ == "__main__":
    run()
