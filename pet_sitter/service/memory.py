"""内存版数据服务：行为与本地实现一致，数据只存在于进程内，用于测试。"""
from datetime import datetime
from typing import Callable, Optional

from pet_sitter.service.local import LocalDataService
from pet_sitter.storage.backend import MemoryBackend
from pet_sitter.storage.entity_store import EntityStore


class InMemoryDataService(LocalDataService):

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self.backend = MemoryBackend()
        super().__init__(EntityStore(self.backend), clock=clock)
