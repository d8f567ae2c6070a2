"""Exchanger 抽象接口。

上层 ChatController 不直接依赖 HTTP 细节，而是依赖此协议：

- 每种后端实现一个 TurnExchanger（如 ProxyExchanger）。
- 负责：将 ExchangeRequest 转成具体请求，并把响应解析为 ExchangeResponse。

这样可以在不改 Controller 代码的前提下替换后端（或在测试中注入假实现）。
"""

from typing import Protocol
from chat_core.domain.models import ExchangeRequest, ExchangeResponse


class TurnExchanger(Protocol):
    """对话交换协议。

    实现者需要提供：
    - name: Exchanger 名称，用于日志。
    - send(req): 执行一次请求/响应，成功返回 ExchangeResponse，
      失败抛出 ExchangeError（TransportError / ServerError）。
    """

    name: str

    def send(self, req: ExchangeRequest) -> ExchangeResponse:
        ...
