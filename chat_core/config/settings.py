"""配置管理模块。

支持从 .env、config.yaml 以及环境变量加载配置。
优先级：初始化参数 > 环境变量 > .env > config.yaml。
"""

import os
import warnings
from pathlib import Path
from typing import Any, Dict

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def load_yaml_config() -> Dict[str, Any]:
    """从 config.yaml 加载配置（若存在）。"""
    candidates = []
    explicit = os.getenv("CHAT_CONFIG_FILE")
    if explicit:
        candidates.append(Path(explicit).expanduser())
    candidates.extend([
        Path.cwd() / "config.yaml",
        Path(__file__).resolve().parents[2] / "config.yaml",
        Path(__file__).resolve().parents[1] / "config.yaml",
    ])

    seen: set[Path] = set()
    for path in candidates:
        if not path or path in seen:
            continue
        seen.add(path)
        try:
            if path.exists():
                data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
                if isinstance(data, dict):
                    return data
                warnings.warn(f"Config file {path} is not a mapping, ignored")
        except (OSError, yaml.YAMLError) as exc:
            warnings.warn(f"Failed to read config file {path}: {exc}")
    return {}


class Settings(BaseSettings):
    """配置设置（使用 Pydantic）。"""

    # ---- 后端代理 ----
    api_base_url: str = Field(
        default="http://localhost:3000",
        description="后端服务基础URL，代理路径拼接在其后",
    )
    proxy_path: str = Field(default="/api/proxy", description="代理接口路径")
    http_timeout: float = Field(default=30.0, ge=1.0, description="HTTP 超时时间（秒）")
    default_exchanger: str = Field(
        default="proxy",
        description="默认使用的 Exchanger 名称，例如 proxy、echo",
    )

    # ---- 请求体固定字段 ----
    stateful: bool = Field(default=True, description="是否要求后端保留会话上下文")
    verbose: bool = Field(default=False, description="是否要求后端返回详细信息")

    # ---- 标识存储 ----
    storage_root: str = Field(default=".storage", description="持久化存储根目录")
    session_id_key: str = Field(default="sessionId", description="会话存储中 session id 的键名")
    user_id_key: str = Field(default="userId", description="持久存储中 user id 的键名")
    max_identifier_length: int = Field(default=32, ge=1, le=32, description="标识最大长度")

    # ---- 日志 ----
    log_dir: str = Field(default="logs", description="日志目录")
    log_redact_content: bool = Field(default=False, description="是否脱敏日志内容")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def proxy_url(self) -> str:
        return self.api_base_url.rstrip("/") + "/" + self.proxy_path.lstrip("/")

    @staticmethod
    def _config_source() -> Dict[str, Any]:
        data = load_yaml_config()
        # widget 段由 chat_core.config.widget 单独解析
        return {k: v for k, v in data.items() if k != "widget"}

    @field_validator("api_base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("api_base_url must start with http:// or https://")
        return v

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            cls._config_source,
            file_secret_settings,
        )


settings = Settings()
