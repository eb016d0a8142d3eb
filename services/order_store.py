"""订单 store"""

import logging
from typing import Dict, List, Optional

from core.clock import Clock, iso_timestamp, system_clock
from core.reactive import Ref, Computed
from core.types import OrderStatus, Record, StorageKey
from infrastructure.storage import LocalStorage
from models.order import Order

logger = logging.getLogger(__name__)


class OrderStore:
    """订单 store（内存缓存 + 写穿持久化）

    订单列表按时间倒序（最新在前）。每次修改后把整个列表写入存储，
    不做批量或延迟写入。
    """

    def __init__(self, storage: LocalStorage, clock: Clock = system_clock):
        self.storage = storage
        self.clock = clock
        self.orders: Ref[List[Record]] = Ref([])
        self.order_stats: Computed[Dict[str, int]] = Computed(self._compute_stats, self.orders)

    def _compute_stats(self) -> Dict[str, int]:
        orders = self.orders.value
        stats = {"total": len(orders)}
        for status in OrderStatus:
            stats[status.value] = sum(1 for o in orders if o.get("status") == status.value)
        return stats

    def get_order_stats(self) -> Dict[str, int]:
        """订单统计：{total, pending, confirmed, completed, cancelled}"""
        return dict(self.order_stats.value)

    def _find(self, order_id: str) -> Optional[Record]:
        return next((o for o in self.orders.value if o.get("id") == order_id), None)

    def get_order(self, order_id: str) -> Optional[Record]:
        """按订单号查找"""
        return self._find(order_id)

    # ==================== 修改操作 ====================

    def add_order(self, order_data: Record) -> Record:
        """添加订单，最新订单放在最前面"""
        order = Order.create(order_data, self.clock()).to_dict()
        self.orders.value.insert(0, order)
        self.orders.trigger()
        self.persist()
        logger.info(f"创建订单: {order['id']}")
        return order

    def update_order_status(self, order_id: str, status: str):
        """更新订单状态，订单不存在时不做任何事"""
        if not OrderStatus.is_valid(status):
            logger.warning(f"无效的订单状态: {status}，有效值: {[s.value for s in OrderStatus]}")
            return
        order = self._find(order_id)
        if order is None:
            return
        order["status"] = OrderStatus(status).value
        order["updatedAt"] = iso_timestamp(self.clock())
        self.orders.trigger()
        self.persist()
        logger.debug(f"订单状态更新: {order_id} -> {order['status']}")

    def cancel_order(self, order_id: str):
        """取消订单"""
        self.update_order_status(order_id, OrderStatus.CANCELLED.value)

    def delete_order(self, order_id: str):
        """删除订单"""
        order = self._find(order_id)
        if order is None:
            return
        self.orders.value.remove(order)
        self.orders.trigger()
        self.persist()
        logger.debug(f"删除订单: {order_id}")

    def clear_orders(self):
        """清空所有订单并删除存储键"""
        self.orders.value = []
        self.storage.remove_item(StorageKey.ORDERS.value)
        logger.info("已清空所有订单")

    # ==================== 持久化 ====================

    def persist(self) -> bool:
        """把整个订单列表写入存储"""
        return self.storage.set_storage(StorageKey.ORDERS.value, self.orders.value)

    def restore_from_storage(self):
        """从存储恢复订单

        键不存在时保持当前状态；数据损坏时重置为空列表。
        """
        if self.storage.get_item(StorageKey.ORDERS.value) is None:
            return
        orders = self.storage.get_storage(StorageKey.ORDERS.value)
        if not isinstance(orders, list):
            logger.error(f"恢复订单信息失败: 数据格式错误 ({type(orders).__name__})")
            orders = []
        valid = [o for o in orders if isinstance(o, dict)]
        if len(valid) != len(orders):
            logger.warning(f"忽略 {len(orders) - len(valid)} 条格式错误的订单")
        orders = valid
        self.orders.value = orders
        logger.debug(f"已从存储恢复 {len(orders)} 个订单")
