"""端到端集成测试

空列表 -> 创建 -> 完成 -> 删除，页面与远端资源全程保持一致。
"""

from httpx import AsyncClient
from taskmirror.core.models import Task

EMPTY_MESSAGE = "Não há tarefas cadastradas!"


class TestEndToEnd:
    async def test_full_lifecycle(
        self, client: AsyncClient, board, fake_remote, sync_service
    ):
        # 1. 初次加载：远端为空
        board.loading = True
        resp = await client.get("/")
        assert "Carregando..." in resp.text

        await sync_service.load()
        resp = await client.get("/")
        assert EMPTY_MESSAGE in resp.text

        # 2. 创建
        resp = await client.post("/tasks", data={"title": "Test", "time": "1"})
        assert resp.status_code == 303
        resp = await client.get("/")
        assert EMPTY_MESSAGE not in resp.text
        assert '<h3 class="">Test</h3>' in resp.text
        assert "Duração: 1 h" in resp.text
        assert len(fake_remote.todos) == 1
        task_id = fake_remote.todos[0]["id"]
        assert board.tasks[0].id == task_id

        # 3. 完成
        resp = await client.post(f"/tasks/{task_id}/toggle")
        assert resp.status_code == 303
        resp = await client.get("/")
        assert '<h3 class="todo-done">Test</h3>' in resp.text
        assert fake_remote.todos[0]["done"] is True

        # 4. 删除
        resp = await client.post(f"/tasks/{task_id}/delete")
        assert resp.status_code == 303
        resp = await client.get("/")
        assert EMPTY_MESSAGE in resp.text
        assert fake_remote.todos == []

        assert fake_remote.methods() == ["GET", "POST", "PUT", "DELETE"]

    async def test_loaded_count_matches_remote(
        self, client: AsyncClient, fake_remote, sync_service
    ):
        fake_remote.todos.extend(
            [{"id": str(i), "title": f"Task {i}", "time": "2", "done": False} for i in range(5)]
        )

        await sync_service.load()
        resp = await client.get("/")

        assert resp.text.count('class="todo"') == 5
        assert "Carregando..." not in resp.text
        api = await client.get("/api/tasks")
        assert len(api.json()["tasks"]) == 5

    async def test_reload_drops_phantom_task(self, client: AsyncClient, board, sync_service):
        """远端拒绝创建时本地仍出现该任务，重新加载后消失"""
        board.append(Task(id="phantom", title="Phantom", time="1"))

        await sync_service.load()

        assert board.find("phantom") is None
