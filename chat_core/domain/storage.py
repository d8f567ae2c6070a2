from typing import Optional, Protocol


class KeyValueStorage(Protocol):
    """字符串键值存储协议（对应浏览器的 sessionStorage / localStorage）。

    读写失败时实现方应抛出 StorageUnavailableError。
    """

    scope: str

    def get_item(self, key: str) -> Optional[str]:
        ...

    def set_item(self, key: str, value: str) -> None:
        ...

    def remove_item(self, key: str) -> None:
        ...

    def clear(self) -> None:
        ...
