"""配置常量模块 -- 可通过环境变量覆盖

包含表单校验规则、加载页刷新间隔、Web 服务监听地址等可配置项。
整数类配置取值非法时记录告警并回退默认值，不阻塞启动。
"""

import os

import structlog

log = structlog.get_logger()

# 任务标题：仅字母、数字、空格、下划线，且至少包含一个字母或数字
TITLE_PATTERN: str = r"^[A-Za-z0-9 _]*[A-Za-z0-9][A-Za-z0-9 _]*$"

# 预计耗时（小时）：非负整数，不允许前导零
TIME_PATTERN: str = r"^(0|[1-9][0-9]*)$"


def _get_int_env(env_var: str, default: int, minimum: int) -> int:
    val = os.environ.get(env_var)
    if not val:
        return default
    try:
        parsed = int(val)
    except ValueError:
        parsed = None
    if parsed is None or parsed < minimum:
        log.warning(
            "invalid_int_config",
            env_var=env_var,
            value=val,
            fallback=default,
        )
        return default
    return parsed


def get_loading_refresh_seconds() -> int:
    """初次加载未完成时，加载页自动刷新间隔（秒）"""
    return _get_int_env("TASKMIRROR_LOADING_REFRESH_SECONDS", 1, minimum=1)


def get_bind_host() -> str:
    """获取 Web 服务监听地址"""
    return os.environ.get("TASKMIRROR_HOST", "127.0.0.1")


def get_bind_port() -> int:
    """获取 Web 服务监听端口"""
    return _get_int_env("TASKMIRROR_PORT", 3000, minimum=1)
