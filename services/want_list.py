"""我的想看列表"""

import logging
from typing import Any, Iterable

from core.types import Record, StorageKey
from models.listing import OperationResult, new_favorite_item
from .record_list import RecordList

logger = logging.getLogger(__name__)


class WantList(RecordList):
    """想看（收藏）列表，同一房源 id 最多一条"""

    storage_key = StorageKey.MY_WANT.value

    def add(self, item: Record) -> OperationResult:
        """添加房源到想看列表（最新在前）"""
        items = self.get_list()
        if self._find_index(items, item.get("id")) is not None:
            return OperationResult.fail("该房源已在想看列表中")
        new_item = new_favorite_item(item, self.clock())
        items.insert(0, new_item)
        self.persist(items)
        logger.debug(f"加入想看: {new_item.get('id')}")
        return OperationResult.ok(data=new_item)

    def remove(self, item_id: Any) -> OperationResult:
        """从想看列表删除"""
        items = self.get_list()
        index = self._find_index(items, item_id)
        if index is None:
            return OperationResult.fail("未找到该房源")
        items.pop(index)
        self.persist(items)
        return OperationResult.ok()

    def remove_batch(self, ids: Iterable[Any]) -> OperationResult:
        """批量删除，只写一次存储

        Returns:
            count 为实际删除的条数
        """
        id_list = list(ids)
        items = self.get_list()
        remaining = [item for item in items if item.get("id") not in id_list]
        self.persist(remaining)
        removed = len(items) - len(remaining)
        logger.debug(f"批量删除想看: {removed} 条")
        return OperationResult.ok(count=removed)

    def has(self, item_id: Any) -> bool:
        """检查是否已在想看列表中"""
        return self._find_index(self.get_list(), item_id) is not None
