"""离线 Exchanger：不访问网络，直接回显用户输入。

用于本地演示以及没有后端代理时的调试。
"""

from typing import Callable, Optional

from chat_core.domain.models import ExchangeRequest, ExchangeResponse


class EchoExchanger:
    name = "echo"

    def __init__(self, transform: Optional[Callable[[str], str]] = None):
        self._transform = transform or (lambda s: s)

    def send(self, req: ExchangeRequest) -> ExchangeResponse:
        return ExchangeResponse(content=self._transform(req.turn.content))
