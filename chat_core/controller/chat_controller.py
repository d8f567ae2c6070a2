"""ChatController 核心模块。

实现一次提交的完整流程：输入校验、先行追加用户消息、构造请求、
调用 Exchanger、追加 agent 回复或记录错误，并维护 busy 标志。

展示层只通过 render 回调观察 ChatViewState，
通过 InputCallbacks 提交文本，任何异常都不会从这里抛给展示层。
"""

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from chat_core.config.settings import settings
from chat_core.config.widget import ChatConfig, load_widget_config
from chat_core.domain.conversation import Conversation
from chat_core.domain.exceptions import ExchangeError
from chat_core.domain.models import ChatViewState, ExchangeRequest, Identifiers, Turn
from chat_core.exchangers.base import TurnExchanger
from chat_core.identity import IdentityStore
from chat_core.infrastructure.logging.logger import log_event, logger


class ChatStatus(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"


RenderCallback = Callable[[ChatViewState], None]


@dataclass(frozen=True)
class InputCallbacks:
    """展示层使用的输入回调。"""

    on_submit_text: Callable[[str], bool]
    on_prompt_select: Callable[[str], bool]


class ChatController:
    def __init__(
        self,
        exchanger: TurnExchanger,
        identity_store: IdentityStore,
        config: Optional[ChatConfig] = None,
        stateful: Optional[bool] = None,
        verbose: Optional[bool] = None,
    ):
        self._exchanger = exchanger
        self._config = config or load_widget_config()
        self._stateful = settings.stateful if stateful is None else stateful
        self._verbose = settings.verbose if verbose is None else verbose
        # 标识在挂载时读取一次，之后每次提交复用
        self._identifiers = identity_store.identifiers()

        self._conversation = Conversation()
        self._status = ChatStatus.IDLE
        self._is_loading = False
        self._error: Optional[str] = None
        self._pending_input = ""
        self._renderers: List[RenderCallback] = []
        self._lock = threading.Lock()

    # ---- 只读状态 ----

    @property
    def conversation(self) -> Conversation:
        return self._conversation

    @property
    def status(self) -> ChatStatus:
        return self._status

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def error(self) -> Optional[str]:
        return self._error

    @property
    def identifiers(self) -> Identifiers:
        return self._identifiers

    @property
    def pending_input(self) -> str:
        return self._pending_input

    @property
    def config(self) -> ChatConfig:
        return self._config

    def view_state(self) -> ChatViewState:
        return ChatViewState(
            conversation=self._conversation,
            is_loading=self._is_loading,
            error=self._error,
            identifiers=self._identifiers,
            pending_input=self._pending_input,
        )

    # ---- 展示层接入 ----

    def subscribe(self, render: RenderCallback) -> Callable[[], None]:
        """注册 render 回调并立即以当前状态调用一次，返回取消订阅函数。"""

        self._renderers.append(render)
        render(self.view_state())

        def unsubscribe() -> None:
            if render in self._renderers:
                self._renderers.remove(render)

        return unsubscribe

    def input_callbacks(self) -> InputCallbacks:
        return InputCallbacks(on_submit_text=self.submit, on_prompt_select=self.submit_prompt)

    def set_input(self, text: str) -> None:
        self._pending_input = text
        self._notify()

    # ---- 提交 ----

    def submit_prompt(self, text: str) -> bool:
        """快捷提问：先写入输入框，再直接提交同一文本，不等待重新渲染。"""

        self._pending_input = text
        return self.submit(text)

    def submit(self, text: str) -> bool:
        """提交一条用户消息，返回是否真正发起了交换。

        空白输入静默忽略；正在提交时拒绝新的提交。
        """

        content = (text or "").strip()
        if not content:
            return False
        with self._lock:
            if self._status is ChatStatus.SUBMITTING:
                log_event(logging.WARNING, "Submit rejected while busy", self._log_ctx())
                return False
            self._status = ChatStatus.SUBMITTING

        self._error = None
        self._pending_input = ""
        user_turn = Turn(role="user", content=content)
        self._conversation = self._conversation.append(user_turn)
        request = ExchangeRequest(
            turn=user_turn,
            user_id=self._identifiers.user_id,
            session_id=self._identifiers.session_id,
            stateful=self._stateful,
            stream=False,
            verbose=self._verbose,
        )
        try:
            self._is_loading = True
            self._notify()
            response = self._exchanger.send(request)
            self._conversation = self._conversation.append(Turn(role="agent", content=response.content))
            self._pending_input = ""
        except ExchangeError as e:
            log_event(
                logging.ERROR,
                "Error fetching agent response",
                self._log_ctx(),
                kind=e.kind,
                code=e.code,
                error=e.message,
            )
            self._error = e.message
        except Exception as e:
            logger.exception("Unexpected exchanger failure", extra={"extra": self._log_ctx()})
            self._error = str(e) or "Unexpected error while contacting the agent."
        finally:
            self._is_loading = False
            with self._lock:
                self._status = ChatStatus.IDLE
            self._notify()
        return True

    def _notify(self) -> None:
        state = self.view_state()
        for render in list(self._renderers):
            try:
                render(state)
            except Exception:
                # 单个 render 回调出错不能影响状态机
                logger.exception("Render callback failed", extra={"extra": self._log_ctx()})

    def _log_ctx(self) -> Dict[str, Any]:
        return {
            "exchanger": getattr(self._exchanger, "name", "unknown"),
            "session_id": self._identifiers.session_id,
            "turns": len(self._conversation),
        }
