"""业务服务模块：四个本地状态 store"""

from .session_store import SessionStore
from .order_store import OrderStore
from .want_list import WantList
from .appointment_list import AppointmentList

__all__ = [
    "SessionStore",
    "OrderStore",
    "WantList",
    "AppointmentList",
]
