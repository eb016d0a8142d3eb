"""
核心模块

提供抽象接口、响应式原语和类型定义，解决循环依赖问题。
"""

from .interfaces import KeyValueStorage
from .reactive import Ref, Computed
from .types import (
    OrderStatus,
    AppointmentStatus,
    StorageKey,
    Record,
)

__all__ = [
    # 接口
    "KeyValueStorage",
    # 响应式
    "Ref",
    "Computed",
    # 类型
    "OrderStatus",
    "AppointmentStatus",
    "StorageKey",
    "Record",
]
