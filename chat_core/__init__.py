"""Chat Core 顶层包。

该包提供聊天组件的核心实现：会话/用户标识的生成与持久化、
只追加的会话记录、与后端代理的对话交换，以及串联三者的 ChatController。
"""

from chat_core.controller import ChatController, ChatStatus, InputCallbacks
from chat_core.domain.conversation import Conversation
from chat_core.domain.models import Turn, ExchangeRequest, ExchangeResponse, PLACEHOLDER_REPLY
from chat_core.identity import IdentityStore

__all__ = [
    "ChatController",
    "ChatStatus",
    "InputCallbacks",
    "Conversation",
    "Turn",
    "ExchangeRequest",
    "ExchangeResponse",
    "PLACEHOLDER_REPLY",
    "IdentityStore",
]
