"""Remote 异常体系

TodoApiClient 只抛出 RemoteError 及其子类，调用方据此决定是否容错。
"""


class RemoteError(Exception):
    """远端资源访问基础异常"""

    def __init__(self, message: str, recoverable: bool = True) -> None:
        """
        Args:
            message: 错误描述
            recoverable: 是否可通过重试恢复
        """
        super().__init__(message)
        self.recoverable = recoverable


class RemoteUnreachableError(RemoteError):
    """远端资源不可达（连接失败、超时、DNS 解析失败等）"""

    def __init__(self, base_url: str, original_error: Exception) -> None:
        """
        Args:
            base_url: 尝试连接的资源地址
            original_error: 原始异常
        """
        super().__init__(
            f"远端资源不可达: {base_url} -- {original_error}",
            recoverable=True,
        )
        self.base_url = base_url
        self.original_error = original_error


class RemoteResponseError(RemoteError):
    """远端返回非 2xx 状态码"""

    def __init__(self, status_code: int, method: str, path: str) -> None:
        super().__init__(
            f"远端返回错误状态 {status_code}: {method} {path}",
            recoverable=status_code >= 500,
        )
        self.status_code = status_code
        self.method = method
        self.path = path


class RemotePayloadError(RemoteError):
    """响应体不是合法 JSON，或不是预期的任务记录结构"""

    def __init__(self, message: str = "远端响应体无法解析") -> None:
        super().__init__(message, recoverable=False)
