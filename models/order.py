"""订单数据模型"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict

from core.clock import epoch_millis, iso_timestamp
from core.types import ORDER_ID_PREFIX, OrderStatus, Record

# 由系统生成的字段，调用方同名字段会被覆盖
RESERVED_FIELDS = ("id", "status", "createdAt", "updatedAt")


@dataclass
class Order:
    """订单

    调用方传入的字段原样保存在 extra 中，序列化时与系统字段合并。
    """
    id: str
    status: str = OrderStatus.PENDING.value
    created_at: str = ""
    updated_at: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def create(cls, data: Record, now: datetime) -> "Order":
        """创建新订单：生成订单号，状态置为 pending，两个时间戳相同"""
        timestamp = iso_timestamp(now)
        return cls(
            id=f"{ORDER_ID_PREFIX}{epoch_millis(now)}",
            status=OrderStatus.PENDING.value,
            created_at=timestamp,
            updated_at=timestamp,
            extra={k: v for k, v in (data or {}).items() if k not in RESERVED_FIELDS}
        )

    def to_dict(self) -> Record:
        return {
            "id": self.id,
            **self.extra,
            "status": self.status,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at
        }
