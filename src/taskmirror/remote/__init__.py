"""taskmirror Remote -- 远端任务集合资源（/todos）的 HTTP 访问层

packages remote 的公开接口导出。
"""

# 核心组件
from .client import TodoApiClient

# 配置
from .config import RemoteConfig, load_remote_config

# 异常
from .exceptions import (
    RemoteError,
    RemotePayloadError,
    RemoteResponseError,
    RemoteUnreachableError,
)

__all__ = [
    "TodoApiClient",
    "RemoteConfig",
    "load_remote_config",
    "RemoteError",
    "RemoteUnreachableError",
    "RemoteResponseError",
    "RemotePayloadError",
]
