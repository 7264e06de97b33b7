"""健康检查路由

GET /health: Liveness 检查，永远返回 200。
GET /ready: Readiness 检查，包含初次加载状态与远端资源可达性。
"""

import structlog
from fastapi import APIRouter, Depends
from starlette.responses import JSONResponse
from taskmirror.remote import TodoApiClient

from ..deps import get_board, get_remote_client
from ..services.board import TaskBoard

log = structlog.get_logger()

router = APIRouter()


@router.get("/health")
async def health():
    """Liveness 检查 -- 永远返回 200"""
    return {"status": "ok"}


@router.get("/ready")
async def ready(
    board: TaskBoard = Depends(get_board),
    remote_client: TodoApiClient = Depends(get_remote_client),
):
    """Readiness 检查

    检查项：
    1. board: 初次加载是否完成（loading / ok）
    2. remote: 远端 /todos 资源是否可达
    """
    checks = {}
    all_ok = True

    # 1. 本地状态
    if board.loading:
        checks["board"] = "loading"
        all_ok = False
    else:
        checks["board"] = "ok"

    # 2. 远端资源
    try:
        if await remote_client.health_check():
            checks["remote"] = "ok"
        else:
            checks["remote"] = "unreachable"
            all_ok = False
    except Exception as e:
        log.warning("health_check_error", error=str(e))
        checks["remote"] = "unreachable"
        all_ok = False

    status_code = 200 if all_ok else 503
    status_text = "ready" if all_ok else "not_ready"

    return JSONResponse(
        status_code=status_code,
        content={
            "status": status_text,
            "checks": checks,
        },
    )
