"""本地状态查询路由

GET /api/tasks: 返回本地任务集合快照（含初次加载标记）。
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ..deps import get_board
from ..services.board import TaskBoard

router = APIRouter()


class TaskItem(BaseModel):
    """任务条目"""

    id: str
    title: str
    time: str
    done: bool


class TaskListResponse(BaseModel):
    """本地任务集合响应"""

    loading: bool
    tasks: list[TaskItem]


@router.get("/api/tasks", response_model=TaskListResponse)
async def list_local_tasks(board: TaskBoard = Depends(get_board)):
    """查询本地任务集合，按插入顺序"""
    return TaskListResponse(
        loading=board.loading,
        tasks=[
            TaskItem(id=t.id, title=t.title, time=t.time, done=t.done)
            for t in board.tasks
        ],
    )
