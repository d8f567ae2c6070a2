"""会话 / 用户标识的生成与持久化。"""

from chat_core.identity.identity_store import IdentityStore, generate_identifier, is_valid_identifier

__all__ = ["IdentityStore", "generate_identifier", "is_valid_identifier"]
