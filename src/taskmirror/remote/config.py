"""RemoteConfig -- 远端资源配置加载

从环境变量加载配置，不硬编码资源地址。
"""

import os

import structlog
from pydantic import BaseModel, Field

log = structlog.get_logger()


class RemoteConfig(BaseModel):
    """远端资源配置 -- 从环境变量加载

    环境变量:
        TASKMIRROR_API_URL: 资源基础地址（默认 http://localhost:5000）
        TASKMIRROR_API_TIMEOUT_S: 请求超时（秒，默认不设超时）
    """

    base_url: str = Field(
        default="http://localhost:5000",
        description="远端 /todos 资源所在的基础 URL",
    )
    timeout_s: float | None = Field(
        default=None,
        gt=0,
        description="请求超时（秒），None 表示不设超时",
    )


def load_remote_config() -> RemoteConfig:
    """从环境变量加载远端资源配置

    环境变量映射:
        TASKMIRROR_API_URL -> base_url (默认 "http://localhost:5000")
        TASKMIRROR_API_TIMEOUT_S -> timeout_s (默认 None)

    Returns:
        RemoteConfig 实例
    """
    kwargs: dict = {}

    if val := os.environ.get("TASKMIRROR_API_URL"):
        kwargs["base_url"] = val

    if val := os.environ.get("TASKMIRROR_API_TIMEOUT_S"):
        try:
            timeout_s = float(val)
        except ValueError:
            timeout_s = None
        if timeout_s is not None and timeout_s > 0:
            kwargs["timeout_s"] = timeout_s
        else:
            log.warning(
                "invalid_timeout_config",
                env_var="TASKMIRROR_API_TIMEOUT_S",
                value=val,
                fallback=None,
            )
            # 不设超时，不阻塞启动

    return RemoteConfig(**kwargs)
