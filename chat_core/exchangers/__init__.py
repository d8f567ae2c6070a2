"""对话交换（Exchanger）集成层。

该包下的模块负责：
- 定义 Exchanger 抽象接口 (base)。
- 提供具体实现 (proxy_client、echo_client)。
"""

from typing import Optional

from chat_core.config.settings import settings
from chat_core.domain.exceptions import ValidationError
from chat_core.exchangers.base import TurnExchanger
from chat_core.exchangers.echo_client import EchoExchanger
from chat_core.exchangers.proxy_client import ProxyExchanger


def create_exchanger(name: Optional[str] = None) -> TurnExchanger:
    """根据名称创建 Exchanger 实例，默认取配置中的 default_exchanger。"""

    exchanger_name = (name or getattr(settings, "default_exchanger", "proxy")).lower()
    if exchanger_name == "proxy":
        return ProxyExchanger(settings)
    if exchanger_name == "echo":
        return EchoExchanger()
    raise ValidationError(code="UNKNOWN_EXCHANGER", message=f"Unknown exchanger: {exchanger_name!r}")


__all__ = ["TurnExchanger", "ProxyExchanger", "EchoExchanger", "create_exchanger"]
