"""TraceMiddleware -- 为单任务操作绑定 task_id

从 /tasks/{task_id}/toggle、/tasks/{task_id}/delete 路径中提取 task_id，
使同一次操作里的同步日志（远端调用、本地对账）都带上该字段。
"""

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# 单任务操作路径：/tasks/{task_id}/<action>
_TASK_ACTIONS = ("toggle", "delete")


def task_id_from_path(path: str) -> str | None:
    """从单任务操作路径中提取 task_id，其他路径返回 None"""
    parts = [p for p in path.split("/") if p]
    if len(parts) == 3 and parts[0] == "tasks" and parts[2] in _TASK_ACTIONS:
        return parts[1]
    return None


class TraceMiddleware(BaseHTTPMiddleware):
    """任务级追踪中间件"""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        task_id = task_id_from_path(request.url.path)
        if task_id:
            structlog.contextvars.bind_contextvars(task_id=task_id)

        return await call_next(request)
