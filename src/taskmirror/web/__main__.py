"""启动入口 -- python -m taskmirror.web

监听地址由 TASKMIRROR_HOST / TASKMIRROR_PORT 控制。
"""

import uvicorn
from taskmirror.core.config import get_bind_host, get_bind_port


def main() -> None:
    """以 uvicorn 启动 Web 客户端"""
    uvicorn.run(
        "taskmirror.web.main:app",
        host=get_bind_host(),
        port=get_bind_port(),
        log_config=None,
    )


if __name__ == "__main__":
    main()
