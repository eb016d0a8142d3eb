"""读穿式记录列表基类"""

import logging
from typing import Any, List, Optional

from core.clock import Clock, system_clock
from core.types import Record
from infrastructure.storage import LocalStorage

logger = logging.getLogger(__name__)


class RecordList:
    """读穿式记录列表

    不保存内存状态：每次操作都重新读取存储，修改后整键写回。
    共享同一存储的多个上下文之间没有快照一致性，后写者覆盖先写者。
    """

    storage_key: str = ""

    def __init__(self, storage: LocalStorage, clock: Clock = system_clock):
        self.storage = storage
        self.clock = clock

    def get_list(self) -> List[Record]:
        """获取列表"""
        data = self.storage.get_storage(self.storage_key)
        if not isinstance(data, list):
            logger.error(f"存储数据格式错误 [{self.storage_key}]: 应为列表，实际为 {type(data).__name__}")
            return []
        return [item for item in data if isinstance(item, dict)]

    def count(self) -> int:
        return len(self.get_list())

    def persist(self, items: List[Record]) -> bool:
        """整键写回"""
        return self.storage.set_storage(self.storage_key, items)

    @staticmethod
    def _find_index(items: List[Record], item_id: Any) -> Optional[int]:
        for index, item in enumerate(items):
            if item.get("id") == item_id:
                return index
        return None
