"""页面路由 -- 任务表单 + 任务列表（服务端渲染）

GET /: 初次加载未完成时渲染加载页，否则渲染表单与列表。
POST /tasks: 校验表单草稿并创建任务。
POST /tasks/{task_id}/toggle: 翻转完成状态。
POST /tasks/{task_id}/delete: 删除任务。
"""

from pathlib import Path

import structlog
from fastapi import APIRouter, Depends, Form, Request
from fastapi.templating import Jinja2Templates
from pydantic import ValidationError
from starlette.responses import JSONResponse, RedirectResponse, Response
from taskmirror.core.config import TIME_PATTERN, TITLE_PATTERN, get_loading_refresh_seconds
from taskmirror.core.models import TaskDraft

from ..deps import get_board, get_sync_service
from ..services.board import TaskBoard
from ..services.sync_service import TaskSyncService

log = structlog.get_logger()

router = APIRouter()

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))

# 表单校验失败时展示给用户的提示
FIELD_ERROR_MESSAGES = {
    "title": "O título deve conter apenas letras, números, espaços ou _.",
    "time": "A duração deve ser um número inteiro de horas.",
}


def _render_board(
    request: Request,
    board: TaskBoard,
    errors: list[str] | None = None,
    status_code: int = 200,
) -> Response:
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "tasks": board.tasks,
            "draft_title": board.draft_title,
            "draft_time": board.draft_time,
            "errors": errors or [],
            "title_pattern": TITLE_PATTERN,
            "time_pattern": TIME_PATTERN,
        },
        status_code=status_code,
    )


def _draft_errors(exc: ValidationError) -> list[str]:
    fields = []
    for error in exc.errors():
        field = error["loc"][0] if error["loc"] else ""
        if field in FIELD_ERROR_MESSAGES and field not in fields:
            fields.append(field)
    return [FIELD_ERROR_MESSAGES[f] for f in fields]


@router.get("/")
async def index(request: Request, board: TaskBoard = Depends(get_board)):
    """任务页面 -- 加载中时不渲染空列表提示"""
    if board.loading:
        return templates.TemplateResponse(
            request,
            "loading.html",
            {"refresh_seconds": get_loading_refresh_seconds()},
        )
    return _render_board(request, board)


@router.post("/tasks")
async def create_task(
    request: Request,
    title: str = Form(default=""),
    time: str = Form(default=""),
    board: TaskBoard = Depends(get_board),
    sync_service: TaskSyncService = Depends(get_sync_service),
):
    """创建任务

    - 草稿不合法：保留输入，返回 422 并重新渲染表单，不发起远端调用
    - 草稿合法：创建后清空草稿，303 跳回首页
    """
    try:
        draft = TaskDraft(title=title, time=time)
    except ValidationError as e:
        board.keep_draft(title, time)
        errors = _draft_errors(e)
        log.info("task_draft_rejected", title=title, time=time, error_count=len(errors))
        return _render_board(request, board, errors=errors, status_code=422)

    await sync_service.create(draft)
    board.clear_draft()
    return RedirectResponse("/", status_code=303)


@router.post("/tasks/{task_id}/toggle")
async def toggle_task(
    task_id: str,
    board: TaskBoard = Depends(get_board),
    sync_service: TaskSyncService = Depends(get_sync_service),
):
    """翻转任务完成状态"""
    task = board.find(task_id)
    if task is None:
        return JSONResponse(
            status_code=404,
            content={
                "error": {
                    "code": "TASK_NOT_FOUND",
                    "message": f"Task with id {task_id} does not exist",
                }
            },
        )

    await sync_service.toggle(task)
    return RedirectResponse("/", status_code=303)


@router.post("/tasks/{task_id}/delete")
async def delete_task(
    task_id: str,
    sync_service: TaskSyncService = Depends(get_sync_service),
):
    """删除任务（本地不存在时同样跳回首页）"""
    await sync_service.delete(task_id)
    return RedirectResponse("/", status_code=303)
