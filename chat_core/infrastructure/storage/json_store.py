import json
import os
from pathlib import Path
from typing import Any, Dict, Optional
from uuid import uuid4

from chat_core.config.settings import settings
from chat_core.domain.exceptions import StorageUnavailableError


class JsonFileStorage:
    """基于单个 JSON 文件的持久键值存储（对应 localStorage）。

    每次读写都直接访问磁盘，写入先落临时文件再 os.replace，保证文件完整。
    """

    scope = "persistent"

    def __init__(self, root: str | Path | None = None, filename: str = "local_storage.json"):
        self._root = Path(root or settings.storage_root).resolve()
        self._path = self._root / filename

    @property
    def path(self) -> Path:
        return self._path

    def get_item(self, key: str) -> Optional[Any]:
        return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove_item(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)

    def clear(self) -> None:
        self._write({})

    def _read(self) -> Dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except ValueError:
            # 文件损坏（非法 JSON 或非法 UTF-8）视为空存储，下一次写入会覆盖
            return {}
        except OSError as e:
            raise StorageUnavailableError(code="STORE_READ_ERROR", message=str(e))
        return data if isinstance(data, dict) else {}

    def _write(self, data: Dict[str, Any]) -> None:
        tmp_path = self._root / f"{self._path.name}.{uuid4().hex}.tmp"
        try:
            self._root.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
            os.replace(tmp_path, self._path)
        except OSError as e:
            raise StorageUnavailableError(code="STORE_WRITE_ERROR", message=str(e))
