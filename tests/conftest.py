"""全局 pytest 配置 -- 内存版远端 /todos 资源 + app/client fixture"""

from collections.abc import AsyncGenerator
from typing import Any

import pytest
import pytest_asyncio
from fastapi import Body, FastAPI
from httpx import ASGITransport, AsyncClient
from starlette.responses import JSONResponse
from taskmirror.remote import TodoApiClient
from taskmirror.web.services.board import TaskBoard
from taskmirror.web.services.sync_service import TaskSyncService

REMOTE_BASE_URL = "http://remote.test"


class FakeTodoServer:
    """内存中的 /todos 资源，行为对齐 json-server

    requests 记录收到的每个请求 (method, path, body)，便于断言是否发起了远端调用。
    """

    def __init__(self, todos: list[dict[str, Any]] | None = None) -> None:
        self.todos: list[dict[str, Any]] = [dict(t) for t in todos or []]
        self.requests: list[tuple[str, str, Any]] = []
        self.app = FastAPI()

        @self.app.get("/todos")
        async def list_todos():
            self.requests.append(("GET", "/todos", None))
            return self.todos

        @self.app.post("/todos", status_code=201)
        async def create_todo(body: dict = Body(...)):
            self.requests.append(("POST", "/todos", body))
            self.todos.append(body)
            return body

        @self.app.put("/todos/{todo_id}")
        async def update_todo(todo_id: str, body: dict = Body(...)):
            self.requests.append(("PUT", f"/todos/{todo_id}", body))
            for i, todo in enumerate(self.todos):
                if str(todo["id"]) == todo_id:
                    self.todos[i] = body
                    return body
            return JSONResponse(status_code=404, content={})

        @self.app.delete("/todos/{todo_id}")
        async def delete_todo(todo_id: str):
            self.requests.append(("DELETE", f"/todos/{todo_id}", None))
            before = len(self.todos)
            self.todos = [t for t in self.todos if str(t["id"]) != todo_id]
            if len(self.todos) == before:
                return JSONResponse(status_code=404, content={})
            return {}

    def methods(self) -> list[str]:
        return [method for method, _, _ in self.requests]


@pytest.fixture
def fake_remote() -> FakeTodoServer:
    """空的远端资源"""
    return FakeTodoServer()


@pytest_asyncio.fixture
async def remote_client(fake_remote: FakeTodoServer) -> AsyncGenerator[TodoApiClient, None]:
    """指向内存远端资源的 TodoApiClient"""
    client = TodoApiClient(
        base_url=REMOTE_BASE_URL,
        transport=ASGITransport(app=fake_remote.app),
    )
    yield client
    await client.aclose()


@pytest.fixture
def board() -> TaskBoard:
    return TaskBoard()


@pytest.fixture
def sync_service(board: TaskBoard, remote_client: TodoApiClient) -> TaskSyncService:
    return TaskSyncService(board, remote_client)


@pytest_asyncio.fixture
async def app(monkeypatch, remote_client, board, sync_service):
    """创建测试用 FastAPI app 实例（绕过 lifespan，手动注入同步组件）"""
    monkeypatch.setenv("LOGFIRE_SEND_TO_LOGFIRE", "false")

    from taskmirror.web.main import create_app

    application = create_app()
    application.state.remote_client = remote_client
    application.state.board = board
    application.state.sync_service = sync_service
    yield application


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """提供 httpx AsyncClient 用于测试"""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
