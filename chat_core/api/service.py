"""对外 API 服务模块。

提供简化的函数接口供上层应用调用（例如命令行或其他 UI 外壳）。
"""

from typing import Optional, Dict, Any

from chat_core.config.settings import settings
from chat_core.controller import ChatController
from chat_core.exchangers import create_exchanger
from chat_core.identity import IdentityStore
from chat_core.infrastructure.storage.json_store import JsonFileStorage
from chat_core.infrastructure.storage.memory_store import MemoryStorage


_controller: Optional[ChatController] = None


def get_default_controller() -> ChatController:
    """获取默认的 ChatController 实例（单例）。

    会话级标识存于进程内存，用户级标识存于 storage_root 下的 JSON 文件。
    """
    global _controller
    if _controller is None:
        identity = IdentityStore(
            session_storage=MemoryStorage(),
            persistent_storage=JsonFileStorage(root=settings.storage_root),
        )
        _controller = ChatController(exchanger=create_exchanger(), identity_store=identity)
    return _controller


def reset_default_controller() -> None:
    """丢弃默认实例（相当于关闭页面），下次调用时重新创建。"""
    global _controller
    _controller = None


def send_message(user_input: str) -> Dict[str, Any]:
    """发送一条消息并返回提交后的状态。

    Args:
        user_input: 用户输入内容

    Returns:
        包含 submitted、conversation、error 与标识的字典；
        交换失败不会抛异常，而是体现在 error 字段中。
    """
    controller = get_default_controller()
    submitted = controller.submit(user_input)
    ids = controller.identifiers
    return {
        "submitted": submitted,
        "conversation": controller.conversation.to_list(),
        "error": controller.error,
        "session_id": ids.session_id,
        "user_id": ids.user_id,
    }


def get_conversation() -> list[Dict[str, Any]]:
    """获取当前会话的所有消息。

    Returns:
        消息列表，每项包含 role 与 content
    """
    return get_default_controller().conversation.to_list()
