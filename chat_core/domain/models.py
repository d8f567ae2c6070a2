"""统一的对话数据模型。

本模块定义了 Controller、Exchanger 与展示层之间共享的标准数据结构：

- Turn: 一条对话消息（user/agent），创建后不可变。
- ExchangeRequest: 发给后端代理的一次完整请求。
- ExchangeResponse: 从后端解析后的回复结果。
- Identifiers / ChatViewState: 交给展示层渲染的状态快照。

所有 Exchanger 实现都只依赖这些模型，
并负责在后端 JSON 与这些模型之间做转换。
"""

from dataclasses import dataclass
from typing import Literal, Optional, Any, Dict, TYPE_CHECKING

if TYPE_CHECKING:
    # 仅在类型检查时导入，避免运行时循环依赖
    from chat_core.domain.conversation import Conversation


# 对话角色类型（与后端代理的 message.role 字段对应）
Role = Literal["user", "agent"]

# 后端响应缺少 output_data.content 时使用的占位回复
PLACEHOLDER_REPLY = "No valid response received from agent."


@dataclass(frozen=True)
class Turn:
    """一条对话消息。

    - role: 消息角色，"user" 或 "agent"。
    - content: 纯文本内容（agent 回复可能是 Markdown，由展示层负责渲染）。
    """

    role: Role
    content: str

    def to_dict(self) -> Dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass(frozen=True)
class Identifiers:
    """当前会话与用户标识，不可用时为空字符串。"""

    session_id: str = ""
    user_id: str = ""


@dataclass
class ExchangeRequest:
    """一次完整的对话交换请求。

    Controller 每次提交都会重新构造 ExchangeRequest，再交给具体 Exchanger。
    Exchanger 负责把本结构转换成后端代理的 JSON 请求体。
    """

    turn: Turn
    user_id: str
    session_id: str
    stateful: bool = True
    stream: bool = False
    verbose: bool = False

    def to_payload(self) -> Dict[str, Any]:
        """生成 POST /api/proxy 的请求体。"""

        return {
            "data": {"message": self.turn.to_dict()},
            "stateful": self.stateful,
            "stream": self.stream,
            "user_id": self.user_id,
            "session_id": self.session_id,
            "verbose": self.verbose,
        }


@dataclass
class ExchangeResponse:
    """一次交换的回复结果。

    - content: agent 回复文本。
    - degraded: 后端成功返回但缺少 output_data.content 时为 True，
      此时 content 为 PLACEHOLDER_REPLY。
    - raw: 原始响应 JSON，用于调试或日志记录。
    """

    content: str
    degraded: bool = False
    raw: Optional[dict] = None


@dataclass(frozen=True)
class ChatViewState:
    """交给展示层 render 回调的状态快照。"""

    conversation: "Conversation"
    is_loading: bool
    error: Optional[str]
    identifiers: Identifiers
    pending_input: str = ""
