"""想看与约看记录模型"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from core.clock import epoch_millis, local_timestamp
from core.types import AppointmentStatus, Record


def new_favorite_item(item: Record, now: datetime) -> Record:
    """想看记录：房源字段 + 收藏时间"""
    return {**item, "favoriteAt": local_timestamp(now)}


def new_appointment(appointment: Record, now: datetime) -> Record:
    """约看记录

    id 为毫秒时间戳，状态固定为待确认（覆盖调用方传入的 id/status）。
    """
    fields = {k: v for k, v in (appointment or {}).items() if k != "id"}
    return {
        "id": epoch_millis(now),
        **fields,
        "createdAt": local_timestamp(now),
        "status": AppointmentStatus.PENDING.value
    }


@dataclass
class OperationResult:
    """列表操作结果

    序列化后只保留有值的字段：{success, message?, data?, count?}
    """
    success: bool
    message: Optional[str] = None
    data: Optional[Dict[str, Any]] = None
    count: Optional[int] = None

    @classmethod
    def ok(cls, data: Optional[Dict[str, Any]] = None, count: Optional[int] = None) -> "OperationResult":
        return cls(success=True, data=data, count=count)

    @classmethod
    def fail(cls, message: str) -> "OperationResult":
        return cls(success=False, message=message)

    def __bool__(self) -> bool:
        return self.success

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"success": self.success}
        if self.message is not None:
            result["message"] = self.message
        if self.data is not None:
            result["data"] = self.data
        if self.count is not None:
            result["count"] = self.count
        return result
