"""structlog 配置模块

所有日志（应用自身、uvicorn、httpx）统一经 root handler 渲染：
- TASKMIRROR_LOG_FORMAT=dev (默认): ConsoleRenderer
- TASKMIRROR_LOG_FORMAT=json: 每行一个 JSON 对象

uvicorn 以 log_config=None 启动，不再自带 handler，这里负责接管它的 logger。
Logfire APM 由 LOGFIRE_SEND_TO_LOGFIRE 控制，默认关闭。
"""

import logging
import os

import structlog
from fastapi import FastAPI

# 这些第三方 logger 只保留 WARNING 以上：
# httpx 每个请求一条 INFO，与 remote_call_completed 重复；
# uvicorn.access 每个请求一条 INFO，与 request_completed 重复
_QUIETED_LOGGERS = ("httpx", "httpcore", "uvicorn.access")

# 改为向 root 传播的 uvicorn logger
_ROUTED_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def _build_renderer(log_format: str) -> structlog.types.Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer(ensure_ascii=False)
    return structlog.dev.ConsoleRenderer()


def _route_third_party_loggers() -> None:
    """uvicorn 日志改走 root handler，并压低重复的逐请求日志"""
    for name in _ROUTED_LOGGERS:
        logger = logging.getLogger(name)
        logger.handlers.clear()
        logger.propagate = True

    for name in _QUIETED_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def setup_logging() -> None:
    """初始化 structlog + 标准库 logging

    环境变量:
        TASKMIRROR_LOG_FORMAT: dev / json
        TASKMIRROR_LOG_LEVEL: root 日志级别（默认 INFO）
    """
    log_format = os.environ.get("TASKMIRROR_LOG_FORMAT", "dev")
    log_level = os.environ.get("TASKMIRROR_LOG_LEVEL", "INFO")

    # merge_contextvars 带出 LoggingMiddleware/TraceMiddleware 绑定的 request_id、task_id
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=_build_renderer(log_format),
            foreign_pre_chain=shared_processors,
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    _route_third_party_loggers()


def setup_logfire(app: FastAPI) -> None:
    """Logfire 可选初始化

    开启后同时追踪入站页面请求（FastAPI）与出站 /todos 调用（httpx）。
    初始化失败时降级为纯本地日志。
    """
    send_to_logfire = os.environ.get("LOGFIRE_SEND_TO_LOGFIRE", "false").lower()
    if send_to_logfire != "true":
        return

    try:
        import logfire

        logfire.configure()
        logfire.instrument_fastapi(app)
        logfire.instrument_httpx()
    except Exception:
        structlog.get_logger().warning(
            "logfire_init_failed",
            message="Logfire 初始化失败，降级为纯本地日志",
        )
