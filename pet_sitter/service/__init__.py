"""数据服务：接口、本地持久化实现、内存实现与导出格式。"""
from pet_sitter.service.base import DataService
from pet_sitter.service.local import LocalDataService
from pet_sitter.service.memory import InMemoryDataService
from pet_sitter.service.transfer import ExportedData, read_export, write_export

__all__ = [
    "DataService",
    "LocalDataService",
    "InMemoryDataService",
    "ExportedData",
    "read_export",
    "write_export",
]
