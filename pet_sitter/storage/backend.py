"""键值存储后端：按键保存一段 JSON 文本。"""
import os
import re
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

from pet_sitter.config import LOGGER, STORAGE_DIR, ensure_dirs
from pet_sitter.errors import StorageCorruptError

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


class StorageBackend(ABC):
    """按字符串键读写整段文本，不关心内容格式。"""

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """读取键对应的文本；不存在返回 None，无法读成文本时抛出 StorageCorruptError。"""

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """整体替换键对应的文本。"""

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """删除键；不存在时不报错。"""


class MemoryBackend(StorageBackend):
    """进程内字典，测试与内存版数据服务使用。"""

    def __init__(self) -> None:
        self._items: Dict[str, str] = {}

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class JsonFileBackend(StorageBackend):
    """每个键一个 JSON 文件（本地单用户设备）。"""
    _suffix = ".json"

    def __init__(self, base_dir: Optional[Path] = None):
        self.base_dir = base_dir or STORAGE_DIR
        if base_dir is None:
            ensure_dirs()
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        # 键里的冒号等字符在部分文件系统不可用
        return self.base_dir / f"{_UNSAFE_CHARS.sub('__', key)}{self._suffix}"

    def get_item(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                return f.read()
        except UnicodeDecodeError as err:
            raise StorageCorruptError(key, str(err)) from err

    def set_item(self, key: str, value: str) -> None:
        """先写临时文件再替换，读者看到的要么是旧集合要么是新集合。"""
        path = self._path(key)
        fd, tmp = tempfile.mkstemp(dir=self.base_dir, prefix=".tmp-", suffix=self._suffix)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp, path)
        except OSError:
            LOGGER.error("Failed to write %s", path)
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise
        LOGGER.debug("Wrote %s (%d bytes)", path.name, len(value))

    def remove_item(self, key: str) -> None:
        path = self._path(key)
        if path.exists():
            path.unlink()
