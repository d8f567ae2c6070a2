"""统一业务异常模型。

所有跨模块抛出的业务级错误都应该继承自 BusinessError，
便于在 Controller 层做统一捕获，再转换为界面上的错误提示。
"""


class BusinessError(Exception):
    """业务异常基类。

    Attributes:
        code: 机器可读错误码（如 "SERVER_ERROR"）。
        message: 用户可读错误信息。
        http_status: 映射到 HTTP 时可用的状态码，默认 400。
        extra: 其他补充字段（例如 session_id、url 等）。
    """

    def __init__(self, code: str, message: str, http_status: int = 400, **extra):
        self.code = code
        self.message = message
        self.http_status = http_status
        self.extra = extra
        super().__init__(message)


class ExchangeError(BusinessError):
    """一次对话交换（请求/响应）失败。

    kind 区分失败来源："TransportError" 或 "ServerError"。
    """

    kind = "ExchangeError"


class TransportError(ExchangeError):
    """网络层错误，例如连接失败、超时等。"""

    kind = "TransportError"


class ServerError(ExchangeError):
    """后端返回非 2xx 状态码，或响应体不是合法 JSON。"""

    kind = "ServerError"


class StorageUnavailableError(BusinessError):
    """键值存储不可用（无法读写），由 IdentityStore 降级为空标识。"""


class ValidationError(BusinessError):
    """参数或配置校验失败。"""
