"""集合存储：后端（JSON 文件 / 内存）与实体存储。"""
from pet_sitter.storage.backend import JsonFileBackend, MemoryBackend, StorageBackend
from pet_sitter.storage.entity_store import EntityStore

__all__ = ["StorageBackend", "JsonFileBackend", "MemoryBackend", "EntityStore"]
