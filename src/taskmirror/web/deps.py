"""依赖注入模块 -- 通过 FastAPI Depends 注入同步组件

实例通过 app.state 管理，在 lifespan 中初始化/清理。
"""

from fastapi import Request
from taskmirror.remote import TodoApiClient

from .services.board import TaskBoard
from .services.sync_service import TaskSyncService


def get_board(request: Request) -> TaskBoard:
    """从 app.state 获取 TaskBoard 实例"""
    return request.app.state.board


def get_sync_service(request: Request) -> TaskSyncService:
    """从 app.state 获取 TaskSyncService 实例"""
    return request.app.state.sync_service


def get_remote_client(request: Request) -> TodoApiClient:
    """从 app.state 获取 TodoApiClient 实例"""
    return request.app.state.remote_client
