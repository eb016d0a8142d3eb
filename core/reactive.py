"""
响应式状态原语

提供 Ref（可观察容器）和 Computed（派生值）两个原语，
供有内存状态的 store 使用。
"""

import logging
from typing import Any, Callable, Generic, List, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar('T')

Listener = Callable[[], None]


class _Observable:
    """可订阅对象基类"""

    def __init__(self):
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """订阅变更通知

        Returns:
            取消订阅函数
        """
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self):
        for listener in list(self._listeners):
            listener()


class Ref(_Observable, Generic[T]):
    """可观察的值容器

    Usage:
        count = Ref(0)
        count.subscribe(lambda: print("changed"))
        count.value = 1
    """

    def __init__(self, value: T):
        super().__init__()
        self._value = value

    @property
    def value(self) -> T:
        return self._value

    @value.setter
    def value(self, new_value: T):
        self._value = new_value
        self._notify()

    def trigger(self):
        """原地修改（如列表 insert/修改字典）后手动通知"""
        self._notify()

    def __repr__(self) -> str:
        return f"Ref({self._value!r})"


class Computed(_Observable, Generic[T]):
    """派生值

    依赖变更时只标记为脏，下次读取时才重新计算。
    """

    def __init__(self, getter: Callable[[], T], *deps: _Observable):
        super().__init__()
        self._getter = getter
        self._dirty = True
        self._cached: Any = None
        for dep in deps:
            dep.subscribe(self._invalidate)

    def _invalidate(self):
        if not self._dirty:
            self._dirty = True
            self._notify()

    @property
    def value(self) -> T:
        if self._dirty:
            self._cached = self._getter()
            self._dirty = False
        return self._cached

    def __repr__(self) -> str:
        return f"Computed(dirty={self._dirty})"
