"""数据层异常。"""


class DataServiceError(Exception):
    """数据层异常基类。"""


class NotFoundError(DataServiceError, LookupError):
    """更新、删除或复制时引用了不存在的 ID。"""

    def __init__(self, entity: str, entity_id: str):
        super().__init__(f"{entity} not found: {entity_id}")
        self.entity = entity
        self.entity_id = entity_id


class UnauthenticatedError(DataServiceError):
    """需要用户 ID 的操作在未登录时调用。"""

    def __init__(self, message: str = "User is not authenticated"):
        super().__init__(message)


class StorageCorruptError(DataServiceError):
    """集合数据无法解析。存储层捕获后按空集合处理。"""

    def __init__(self, key: str, reason: str):
        super().__init__(f"Corrupt data under {key!r}: {reason}")
        self.key = key
        self.reason = reason
