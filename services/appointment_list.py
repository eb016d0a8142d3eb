"""我的约看列表"""

import logging
from typing import Any

from core.types import AppointmentStatus, Record, StorageKey
from models.listing import OperationResult, new_appointment
from .record_list import RecordList

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "未找到该预约"


class AppointmentList(RecordList):
    """约看（预约看房）列表"""

    storage_key = StorageKey.MY_APPOINTMENT.value

    def add(self, appointment: Record) -> OperationResult:
        """新增预约，状态为待确认（最新在前）"""
        items = self.get_list()
        new_item = new_appointment(appointment, self.clock())
        items.insert(0, new_item)
        self.persist(items)
        logger.debug(f"新增预约: {new_item['id']}")
        return OperationResult.ok(data=new_item)

    def update(self, appointment_id: Any, updates: Record) -> OperationResult:
        """合并更新预约"""
        items = self.get_list()
        index = self._find_index(items, appointment_id)
        if index is None:
            return OperationResult.fail(NOT_FOUND_MESSAGE)
        items[index] = {**items[index], **updates}
        self.persist(items)
        return OperationResult.ok(data=items[index])

    def remove(self, appointment_id: Any) -> OperationResult:
        """删除预约"""
        items = self.get_list()
        index = self._find_index(items, appointment_id)
        if index is None:
            return OperationResult.fail(NOT_FOUND_MESSAGE)
        items.pop(index)
        self.persist(items)
        return OperationResult.ok()

    def cancel(self, appointment_id: Any) -> OperationResult:
        """取消预约"""
        return self.update(appointment_id, {"status": AppointmentStatus.CANCELLED.value})
