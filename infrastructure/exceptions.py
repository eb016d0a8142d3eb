"""
统一异常定义模块

存储层的异常体系。异常只在后端与存储工具之间传递，
store 层对外从不抛出，统一降级为"无操作 + 日志"或空默认值。
"""

from typing import Optional, Dict, Any


class StorageError(Exception):
    """存储相关异常基类"""

    def __init__(
        self,
        message: str,
        key: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.key = key
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典格式，用于日志"""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "key": self.key,
            "details": self.details
        }


class StorageAccessError(StorageError):
    """存储访问错误

    后端不可用或读写失败（文件权限、数据库锁等）。
    """

    def __init__(
        self,
        message: str = "存储访问失败",
        key: Optional[str] = None,
        original_error: Optional[Exception] = None
    ):
        super().__init__(
            message=message,
            key=key,
            details={"original_error": str(original_error)} if original_error else {}
        )
        self.original_error = original_error


class StorageQuotaExceededError(StorageError):
    """存储配额超限

    写入后总占用量将超过配额。
    """

    def __init__(self, key: str, required: int, quota: int):
        super().__init__(
            message=f"写入 '{key}' 超出存储配额 ({required} > {quota})",
            key=key,
            details={"required": required, "quota": quota}
        )
        self.required = required
        self.quota = quota


class SerializationError(StorageError):
    """序列化错误

    存储值不是合法 JSON，或数据无法编码为 JSON。
    """

    def __init__(
        self,
        message: str = "数据序列化失败",
        key: Optional[str] = None,
        original_error: Optional[Exception] = None
    ):
        super().__init__(
            message=message,
            key=key,
            details={"original_error": str(original_error)} if original_error else {}
        )
        self.original_error = original_error
