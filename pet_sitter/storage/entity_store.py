"""实体存储：每种实体一个同构集合，整体读取、修改、整体写回。

没有按行寻址，也没有二级索引，查找都由数据服务线性扫描完成。
适合本地、小数据量、同一时刻单用户的场景。
"""
import json
from typing import List, Optional, Sequence, Type, TypeVar

from pydantic import BaseModel, ValidationError

from pet_sitter.config import LOGGER
from pet_sitter.errors import StorageCorruptError
from pet_sitter.storage.backend import StorageBackend

ModelT = TypeVar("ModelT", bound=BaseModel)


class EntityStore:
    """按键读写 pydantic 模型集合。数据损坏时按「集合尚不存在」处理。"""

    def __init__(self, backend: StorageBackend):
        self.backend = backend

    def _decode(self, key: str, raw: str) -> object:
        try:
            return json.loads(raw)
        except json.JSONDecodeError as err:
            raise StorageCorruptError(key, str(err)) from err

    def _decode_rows(self, key: str, raw: str, model: Type[ModelT]) -> List[ModelT]:
        data = self._decode(key, raw)
        if not isinstance(data, list):
            raise StorageCorruptError(key, f"expected a list, got {type(data).__name__}")
        try:
            return [model.model_validate(item) for item in data]
        except ValidationError as err:
            raise StorageCorruptError(key, str(err)) from err

    def load(self, key: str, model: Type[ModelT]) -> List[ModelT]:
        """读取整个集合；不存在或损坏时返回空列表。"""
        try:
            raw = self.backend.get_item(key)
            if raw is None:
                return []
            rows = self._decode_rows(key, raw, model)
        except StorageCorruptError as err:
            LOGGER.warning("%s; treating collection as empty", err)
            return []
        LOGGER.debug("Loaded %d rows from %s", len(rows), key)
        return rows

    def save(self, key: str, rows: Sequence[BaseModel]) -> None:
        """整体替换集合。"""
        payload = [row.model_dump(mode="json") for row in rows]
        self.backend.set_item(key, json.dumps(payload, indent=2, ensure_ascii=False))

    def load_one(self, key: str, model: Type[ModelT]) -> Optional[ModelT]:
        """读取单行记录（按用户的设置、引导状态）；不存在或损坏返回 None。"""
        try:
            raw = self.backend.get_item(key)
            if raw is None:
                return None
            data = self._decode(key, raw)
            return model.model_validate(data)
        except (StorageCorruptError, ValidationError) as err:
            LOGGER.warning("Unreadable record under %s: %s", key, err)
            return None

    def save_one(self, key: str, row: BaseModel) -> None:
        self.backend.set_item(key, row.model_dump_json(indent=2))

    def remove(self, key: str) -> None:
        self.backend.remove_item(key)
