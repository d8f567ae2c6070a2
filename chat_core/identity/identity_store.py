"""标识存储模块。

IdentityStore 负责两个标识：

- session_id: 存在会话级存储中（进程结束即失效）。
- user_id: 存在持久存储中（跨进程保留，直到被外部清除）。

两者都是不超过 32 个字符的不透明字符串。存储中已有的合法值会被复用；
缺失、类型不对、为空或超长的值会触发重新生成并写回。
任一存储不可用时返回空字符串，而不是抛出异常，对话交换仍可继续。
"""

import logging
from typing import Any, Optional
from uuid import uuid4

from chat_core.config.settings import settings
from chat_core.domain.exceptions import StorageUnavailableError
from chat_core.domain.models import Identifiers
from chat_core.domain.storage import KeyValueStorage
from chat_core.infrastructure.logging.logger import log_event

MAX_IDENTIFIER_LENGTH = 32


def generate_identifier(max_length: int = MAX_IDENTIFIER_LENGTH) -> str:
    """生成新的标识：uuid4 去掉分隔符后截断到 max_length。"""

    return uuid4().hex[:max_length]


def is_valid_identifier(value: Any, max_length: int = MAX_IDENTIFIER_LENGTH) -> bool:
    return isinstance(value, str) and 0 < len(value) <= max_length


class IdentityStore:
    def __init__(
        self,
        session_storage: Optional[KeyValueStorage],
        persistent_storage: Optional[KeyValueStorage],
        session_key: Optional[str] = None,
        user_key: Optional[str] = None,
        max_length: Optional[int] = None,
    ):
        self._session_storage = session_storage
        self._persistent_storage = persistent_storage
        self._session_key = session_key or settings.session_id_key
        self._user_key = user_key or settings.user_id_key
        self._max_length = min(max_length or settings.max_identifier_length, MAX_IDENTIFIER_LENGTH)

    def get_session_id(self) -> str:
        return self._get_or_create(self._session_storage, self._session_key)

    def get_user_id(self) -> str:
        return self._get_or_create(self._persistent_storage, self._user_key)

    def identifiers(self) -> Identifiers:
        return Identifiers(session_id=self.get_session_id(), user_id=self.get_user_id())

    def _get_or_create(self, storage: Optional[KeyValueStorage], key: str) -> str:
        if storage is None:
            return ""
        scope = getattr(storage, "scope", "unknown")
        try:
            value = storage.get_item(key)
            if is_valid_identifier(value, self._max_length):
                return value
            value = generate_identifier(self._max_length)
            storage.set_item(key, value)
        except StorageUnavailableError as e:
            log_event(logging.WARNING, "Identifier storage unavailable", {"scope": scope, "key": key}, error=e.message)
            return ""
        log_event(logging.INFO, "Generated identifier", {"scope": scope, "key": key})
        return value
