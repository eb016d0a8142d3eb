"""数据模型模块"""

from .order import Order, RESERVED_FIELDS
from .session import UserSession
from .listing import OperationResult, new_favorite_item, new_appointment

__all__ = [
    "Order",
    "RESERVED_FIELDS",
    "UserSession",
    "OperationResult",
    "new_favorite_item",
    "new_appointment",
]
