"""TaskSyncService -- 本地任务集合与远端资源的同步

四个操作：
1. load: 应用启动时拉取完整集合，整体替换本地状态
2. create: 提交草稿记录，随后把草稿（而非远端响应）追加到本地
3. toggle: 翻转 done 后提交完整记录，用远端返回的记录替换本地条目
4. delete: 请求删除，随后无论远端结果如何都移除本地条目

所有对账都在 await 之后基于当前的 board.tasks 进行，
同一条记录上的并发操作以最后落定的响应为准。
"""

import structlog
from taskmirror.core.models import Task, TaskDraft
from taskmirror.remote import RemoteError, TodoApiClient

from .board import TaskBoard

log = structlog.get_logger()


class TaskSyncService:
    """任务同步服务"""

    def __init__(self, board: TaskBoard, client: TodoApiClient) -> None:
        self._board = board
        self._client = client

    async def load(self) -> list[Task]:
        """初次加载

        失败时仅记录日志，本地保持空集合；loading 标记无论成败都会清除。
        """
        self._board.loading = True
        try:
            tasks = await self._client.list_tasks()
        except RemoteError as e:
            log.error(
                "task_list_failed",
                error=str(e),
                error_type=type(e).__name__,
            )
        else:
            self._board.replace_all(tasks)
            log.info("task_list_loaded", count=len(tasks))
        finally:
            self._board.loading = False
        return self._board.tasks

    async def create(self, draft: TaskDraft) -> Task:
        """创建任务

        本地追加的是草稿生成的记录；远端失败只记录日志，不回滚。
        """
        task = draft.to_task()
        try:
            await self._client.create_task(task)
        except RemoteError as e:
            log.warning(
                "task_create_failed",
                task_id=task.id,
                error=str(e),
                error_type=type(e).__name__,
            )

        self._board.append(task)
        log.info("task_created", task_id=task.id, title=task.title, time=task.time)
        return task

    async def toggle(self, task: Task) -> Task | None:
        """翻转完成状态

        Returns:
            远端确认后的记录；远端失败时返回 None，本地条目保持不变
        """
        updated = task.model_copy(update={"done": not task.done})
        try:
            acknowledged = await self._client.update_task(updated)
        except RemoteError as e:
            log.warning(
                "task_toggle_failed",
                task_id=task.id,
                error=str(e),
                error_type=type(e).__name__,
            )
            return None

        replaced = self._board.replace(acknowledged)
        log.info(
            "task_toggled",
            task_id=acknowledged.id,
            done=acknowledged.done,
            replaced=replaced,
        )
        return acknowledged

    async def delete(self, task_id: str) -> bool:
        """删除任务

        不检查远端结果，本地条目总是被移除。

        Returns:
            本地是否有条目被移除
        """
        try:
            await self._client.delete_task(task_id)
        except RemoteError as e:
            log.warning(
                "task_delete_failed",
                task_id=task_id,
                error=str(e),
                error_type=type(e).__name__,
            )

        removed = self._board.remove(task_id)
        log.info("task_deleted", task_id=task_id, removed=removed)
        return removed
