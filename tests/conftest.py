import pytest
from fastapi.testclient import TestClient

from todo_service.config import Settings
from todo_service.main import create_app
from todo_service.todo import TodoService


@pytest.fixture
def service():
    svc = TodoService()
    svc.toggle_flag()
    return svc


@pytest.fixture
def app():
    return create_app(Settings(ENV="test"))


@pytest.fixture
def client(app):
    """刚启动的服务：功能开关为关闭状态"""
    with TestClient(app) as c:
        yield c


@pytest.fixture
def enabled_client(client):
    resp = client.post("/toggleflag")
    assert resp.status_code == 200
    return client
