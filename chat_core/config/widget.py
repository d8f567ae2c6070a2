"""Chat widget presentation config (header text and suggested prompts)."""

from __future__ import annotations

import warnings
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError

from chat_core.config.settings import load_yaml_config


class ChatConfig(BaseModel):
    """Static texts consumed by the presentation layer.

    Attributes:
        header_title: 聊天窗口标题。
        header_description: 标题下方的说明文字。
        suggested_prompts_title: 快捷提问区域的标题。
        suggested_prompts: 预置的快捷提问，点击后直接发送。
        max_chat_height: 消息列表的最大高度（像素），由展示层自行解释。
    """

    header_title: str = "Chat Agent"
    header_description: str = "Ask the agent anything."
    suggested_prompts_title: str = "Try one of these:"
    suggested_prompts: List[str] = Field(default_factory=list)
    max_chat_height: int = Field(default=400, ge=0)


def load_widget_config(data: Optional[Dict[str, Any]] = None) -> ChatConfig:
    """Build a ChatConfig from the ``widget`` section of config.yaml."""

    if data is None:
        data = load_yaml_config().get("widget") or {}
    if not isinstance(data, dict):
        warnings.warn("widget config is not a mapping, using defaults")
        return ChatConfig()
    try:
        return ChatConfig(**data)
    except ValidationError as exc:
        warnings.warn(f"Invalid widget config, using defaults: {exc}")
        return ChatConfig()
