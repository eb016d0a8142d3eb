"""
核心类型定义

提供系统中使用的枚举、存储键和类型常量。
"""

from enum import Enum
from typing import Any, Dict


class OrderStatus(str, Enum):
    """订单状态枚举"""
    PENDING = "pending"        # 待确认
    CONFIRMED = "confirmed"    # 已确认
    COMPLETED = "completed"    # 已完成
    CANCELLED = "cancelled"    # 已取消

    @classmethod
    def is_valid(cls, status: str) -> bool:
        """检查状态是否有效"""
        return status in [s.value for s in cls]


class AppointmentStatus(str, Enum):
    """约看状态

    只有这两个值由系统写入，其余值可通过 update 自由设置。
    """
    PENDING = "待确认"
    CANCELLED = "已取消"


class StorageKey(str, Enum):
    """本地存储键（与前端保持一致，不可修改）"""
    ORDERS = "orders"
    USER_INFO = "userInfo"
    TOKEN = "token"
    MY_WANT = "my_want_list"
    MY_APPOINTMENT = "my_appointment_list"


# 记录类型：调用方字段直接合并，保持 JSON 形状
Record = Dict[str, Any]

# 订单号前缀
ORDER_ID_PREFIX = "ORD"

# 本地时间显示格式（年-月-日 时:分）
LOCAL_TIME_FORMAT = "%Y-%m-%d %H:%M"

# 默认存储配额（浏览器 localStorage 通常为 5MB）
DEFAULT_QUOTA_BYTES = 5 * 1024 * 1024
