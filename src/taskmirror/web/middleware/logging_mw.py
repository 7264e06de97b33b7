"""LoggingMiddleware -- 请求级日志

为每个 HTTP 请求生成 request_id，绑定到 structlog contextvars。
request_completed 按结果分级：
- 2xx/3xx: info（表单动作的 303 附带跳转目标 location）
- 4xx: warning（422 草稿被拒、404 任务不存在）
- 5xx: error
"""

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from ulid import ULID

from .trace_mw import task_id_from_path


class LoggingMiddleware(BaseHTTPMiddleware):
    """请求级日志中间件 -- 为每个请求生成 request_id"""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = str(ULID())

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        log = structlog.get_logger()
        await log.ainfo("request_started")

        response = await call_next(request)

        # TraceMiddleware 的绑定发生在下游任务里，不会回传到这里，需要自行解析
        fields: dict = {"status_code": response.status_code}
        if task_id := task_id_from_path(request.url.path):
            fields["task_id"] = task_id
        if location := response.headers.get("location"):
            fields["location"] = location

        if response.status_code >= 500:
            await log.aerror("request_completed", **fields)
        elif response.status_code >= 400:
            await log.awarning("request_completed", **fields)
        else:
            await log.ainfo("request_completed", **fields)

        response.headers["X-Request-ID"] = request_id
        return response
