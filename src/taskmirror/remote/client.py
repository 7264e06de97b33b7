"""TodoApiClient -- 远端 /todos 资源调用封装

| 操作 | 方法 | 路径 |
| 列表 | GET | /todos |
| 创建 | POST | /todos |
| 更新 | PUT | /todos/{id} |
| 删除 | DELETE | /todos/{id} |

不做重试；是否设置超时由 RemoteConfig.timeout_s 决定。
"""

import time
from typing import Any

import httpx
import structlog
from pydantic import ValidationError
from taskmirror.core.models import Task

from .exceptions import (
    RemoteError,
    RemotePayloadError,
    RemoteResponseError,
    RemoteUnreachableError,
)

log = structlog.get_logger()

# 健康检查超时（硬编码，应快速响应）
HEALTH_CHECK_TIMEOUT_S = 5

# 连接类异常类型集合（触发 RemoteUnreachableError）
_CONNECTION_ERROR_TYPES = (
    ConnectionError,
    OSError,
    TimeoutError,
    httpx.TransportError,
)


class TodoApiClient:
    """远端任务集合资源客户端

    持有一个 httpx.AsyncClient，生命周期由调用方管理（aclose()）。
    """

    def __init__(
        self,
        base_url: str = "http://localhost:5000",
        timeout_s: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """初始化客户端

        Args:
            base_url: 资源基础 URL
            timeout_s: 请求超时（秒），None 表示不设超时
            transport: 自定义传输层（测试时注入 ASGITransport/MockTransport）
        """
        self._base_url = base_url.rstrip("/")
        self._http = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=timeout_s,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    async def aclose(self) -> None:
        await self._http.aclose()

    async def list_tasks(self) -> list[Task]:
        """GET /todos -- 拉取完整任务集合

        Raises:
            RemoteUnreachableError: 连接失败或超时
            RemoteResponseError: 非 2xx 状态码
            RemotePayloadError: 响应体不是任务记录数组
        """
        resp = await self._request("GET", "/todos")
        data = _decode_json(resp)
        if not isinstance(data, list):
            raise RemotePayloadError(
                f"GET /todos 应返回数组，实际为 {type(data).__name__}"
            )
        try:
            return [Task.model_validate(item) for item in data]
        except ValidationError as e:
            raise RemotePayloadError(f"任务记录格式错误: {e}") from e

    async def create_task(self, task: Task) -> None:
        """POST /todos -- 提交新任务，响应体不解析"""
        await self._request("POST", "/todos", json=task.model_dump())

    async def update_task(self, task: Task) -> Task:
        """PUT /todos/{id} -- 提交完整记录，返回远端确认后的记录"""
        resp = await self._request("PUT", f"/todos/{task.id}", json=task.model_dump())
        data = _decode_json(resp)
        try:
            return Task.model_validate(data)
        except ValidationError as e:
            raise RemotePayloadError(f"任务记录格式错误: {e}") from e

    async def delete_task(self, task_id: str) -> None:
        """DELETE /todos/{id} -- 响应体不解析"""
        await self._request("DELETE", f"/todos/{task_id}")

    async def health_check(self) -> bool:
        """检查远端资源可达性

        发送 GET {base_url}/todos 请求。

        Returns:
            True 如果返回 200，False 如果不可达或异常

        注意: 此方法不抛出异常，所有异常内部捕获并返回 False。
        """
        try:
            resp = await self._http.get("/todos", timeout=HEALTH_CHECK_TIMEOUT_S)
            return resp.status_code == 200
        except Exception as e:
            log.debug("health_check_failed", url=self._base_url, error=str(e))
            return False

    async def _request(
        self,
        method: str,
        path: str,
        json: dict[str, Any] | None = None,
    ) -> httpx.Response:
        start_time = time.monotonic()
        try:
            resp = await self._http.request(method, path, json=json)
        except _CONNECTION_ERROR_TYPES as e:
            duration_ms = int((time.monotonic() - start_time) * 1000)
            log.error(
                "remote_call_failed",
                method=method,
                path=path,
                error=str(e),
                error_type=type(e).__name__,
                duration_ms=duration_ms,
            )
            raise RemoteUnreachableError(base_url=self._base_url, original_error=e) from e
        except httpx.HTTPError as e:
            raise RemoteError(f"请求失败: {method} {path} -- {e}") from e

        duration_ms = int((time.monotonic() - start_time) * 1000)
        log.debug(
            "remote_call_completed",
            method=method,
            path=path,
            status_code=resp.status_code,
            duration_ms=duration_ms,
        )

        if resp.is_error:
            raise RemoteResponseError(resp.status_code, method, path)
        return resp


def _decode_json(resp: httpx.Response) -> Any:
    """解析响应体 JSON，失败时抛出 RemotePayloadError"""
    try:
        return resp.json()
    except ValueError as e:
        raise RemotePayloadError(
            f"响应体不是合法 JSON: {resp.request.method} {resp.request.url.path}"
        ) from e
