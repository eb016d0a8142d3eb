"""
本地存储管理工具

对 KeyValueStorage 做 JSON 序列化封装。所有异常在这里被捕获并记录，
调用方只会拿到默认值或布尔结果。
"""

import json
import logging
from typing import Any, Optional

from core.interfaces import KeyValueStorage
from .exceptions import StorageError, SerializationError

logger = logging.getLogger(__name__)


class LocalStorage:
    """本地存储工具

    Usage:
        storage = LocalStorage(MemoryStorage())
        storage.set_storage("my_want_list", [{"id": "H1"}])
        items = storage.get_storage("my_want_list")
    """

    def __init__(self, backend: KeyValueStorage):
        self.backend = backend

    # ==================== JSON 读写 ====================

    def get_storage(self, key: str) -> Any:
        """获取存储数据

        Returns:
            解析后的 JSON 值；键不存在或解析失败时返回空列表
        """
        raw = self.get_item(key)
        if not raw:
            return []
        try:
            return json.loads(raw)
        except (ValueError, RecursionError) as e:
            error = SerializationError(f"获取存储数据失败: {e}", key=key, original_error=e)
            logger.error(error.message, extra={"extra_data": error.to_dict()})
            return []

    def set_storage(self, key: str, data: Any) -> bool:
        """保存存储数据（整键覆盖）

        Returns:
            是否写入成功
        """
        try:
            raw = json.dumps(data, ensure_ascii=False, allow_nan=False)
        except (TypeError, ValueError, RecursionError) as e:
            error = SerializationError(f"保存存储数据失败: {e}", key=key, original_error=e)
            logger.error(error.message, extra={"extra_data": error.to_dict()})
            return False
        return self.set_item(key, raw)

    # ==================== 原始字符串读写 ====================

    def get_item(self, key: str) -> Optional[str]:
        """读取原始字符串，失败时返回 None"""
        try:
            return self.backend.get_item(key)
        except StorageError as e:
            logger.error(f"读取存储失败 [{key}]: {e.message}", extra={"extra_data": e.to_dict()})
            return None

    def set_item(self, key: str, value: str) -> bool:
        """写入原始字符串"""
        try:
            self.backend.set_item(key, value)
            return True
        except StorageError as e:
            logger.error(f"保存存储数据失败 [{key}]: {e.message}", extra={"extra_data": e.to_dict()})
            return False

    def remove_item(self, key: str) -> bool:
        """删除键"""
        try:
            self.backend.remove_item(key)
            return True
        except StorageError as e:
            logger.error(f"删除存储数据失败 [{key}]: {e.message}", extra={"extra_data": e.to_dict()})
            return False

    def stats(self) -> dict:
        """获取存储统计"""
        try:
            return {
                "keys": self.backend.keys(),
                "usage_bytes": self.backend.usage_bytes(),
                "quota_bytes": getattr(self.backend, "quota_bytes", 0)
            }
        except StorageError as e:
            logger.error(f"获取存储统计失败: {e.message}")
            return {"keys": [], "usage_bytes": 0, "quota_bytes": 0}
