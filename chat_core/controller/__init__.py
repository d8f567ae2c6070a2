"""对话控制器：串联标识、会话记录与 Exchanger 的 Idle/Submitting 状态机。"""

from chat_core.controller.chat_controller import ChatController, ChatStatus, InputCallbacks, RenderCallback

__all__ = ["ChatController", "ChatStatus", "InputCallbacks", "RenderCallback"]
