"""
抽象接口定义

定义持久化存储的抽象接口，用于解耦 store 与具体的存储后端。
"""

from abc import ABC, abstractmethod
from typing import List, Optional


class KeyValueStorage(ABC):
    """本地键值存储抽象接口

    语义与浏览器 localStorage 一致：键和值都是字符串，
    每次写入都是整键覆盖。
    """

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """读取键值

        Args:
            key: 存储键

        Returns:
            存储的字符串，键不存在时返回 None
        """
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """写入键值（整键覆盖）

        Raises:
            StorageQuotaExceededError: 超出存储配额
            StorageAccessError: 后端读写失败
        """
        pass

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """删除键，键不存在时不做任何事"""
        pass

    @abstractmethod
    def keys(self) -> List[str]:
        """列出所有键"""
        pass

    @abstractmethod
    def clear(self) -> None:
        """清空所有键"""
        pass

    @abstractmethod
    def usage_bytes(self, exclude_key: Optional[str] = None) -> int:
        """当前占用量（键与值的字符数之和）

        Args:
            exclude_key: 计算时忽略的键（用于覆盖写入前的配额检查）
        """
        pass

    def close(self) -> None:
        """释放后端资源"""
        pass
