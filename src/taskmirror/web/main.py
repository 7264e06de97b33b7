"""FastAPI 应用主文件

app 创建 + lifespan 管理：远端客户端初始化/关闭 + 初次加载 + 路由注册。
"""

import asyncio
import contextlib
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

import structlog
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from taskmirror.remote import TodoApiClient, load_remote_config

from .middleware.logging_config import setup_logfire, setup_logging
from .middleware.logging_mw import LoggingMiddleware
from .middleware.trace_mw import TraceMiddleware
from .routes import api, health, pages
from .services.board import TaskBoard
from .services.sync_service import TaskSyncService

log = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """应用生命周期管理：启动时创建远端客户端并发起初次加载，关闭时释放连接"""
    remote_config = load_remote_config()
    remote_client = TodoApiClient(
        base_url=remote_config.base_url,
        timeout_s=remote_config.timeout_s,
    )
    board = TaskBoard()
    sync_service = TaskSyncService(board, remote_client)

    app.state.remote_config = remote_config
    app.state.remote_client = remote_client
    app.state.board = board
    app.state.sync_service = sync_service

    log.info(
        "remote_client_initialized",
        base_url=remote_config.base_url,
        timeout_s=remote_config.timeout_s,
    )

    # 初次加载在后台进行，期间页面渲染加载提示
    board.loading = True
    app.state.initial_load = asyncio.create_task(sync_service.load())

    yield

    # 关闭：未完成的初次加载直接取消
    initial_load = app.state.initial_load
    if not initial_load.done():
        initial_load.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await initial_load
    await remote_client.aclose()


def create_app() -> FastAPI:
    """创建 FastAPI 应用实例"""
    app = FastAPI(
        title="taskmirror",
        version="0.1.0",
        description="任务清单 Web 客户端",
        lifespan=lifespan,
    )

    # 注册中间件（顺序：先 Trace 后 Logging）
    app.add_middleware(TraceMiddleware)
    app.add_middleware(LoggingMiddleware)

    # 初始化日志
    setup_logging()
    setup_logfire(app)

    # 注册路由
    app.include_router(pages.router, tags=["pages"])
    app.include_router(api.router, tags=["api"])
    app.include_router(health.router, tags=["health"])

    static_dir = Path(__file__).resolve().parent / "static"
    app.mount("/static", StaticFiles(directory=str(static_dir)), name="static")

    return app


# 默认 app 实例（uvicorn 入口）
app = create_app()
