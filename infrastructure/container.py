"""
依赖注入容器

应用上下文持有一个容器，里面只有单例：存储后端、存储工具和四个 store。
各服务在第一次 get() 时才创建，工厂可以通过容器取得自己的依赖。
"""

import inspect
import logging
from typing import Any, Callable, Dict, Optional, Type, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar('T')

_UNSET = object()


class Container:
    """单例服务容器

    Usage:
        container = Container()
        container.register_singleton('backend', lambda: MemoryStorage())
        container.register_singleton('storage', lambda c: LocalStorage(c.get('backend')))

        storage = container.get('storage', LocalStorage)
    """

    def __init__(self):
        self._factories: Dict[str, Callable[..., Any]] = {}
        self._instances: Dict[str, Any] = {}

    def register_singleton(self, key: str, factory: Callable[..., T]) -> 'Container':
        """注册延迟创建的单例

        Args:
            key: 服务标识符
            factory: 无参工厂，或接收容器的单参工厂
        """
        self._factories[key] = factory
        self._instances.pop(key, None)
        logger.debug(f"注册服务: {key}")
        return self

    def register_instance(self, key: str, instance: T) -> 'Container':
        """注册已创建好的实例"""
        self._factories[key] = lambda: instance
        self._instances[key] = instance
        logger.debug(f"注册实例: {key}")
        return self

    def get(self, key: str, expected_type: Optional[Type[T]] = None) -> T:
        """获取服务实例

        Raises:
            KeyError: 服务未注册
        """
        instance = self._instances.get(key, _UNSET)
        if instance is not _UNSET:
            return instance

        factory = self._factories.get(key)
        if factory is None:
            raise KeyError(f"服务未注册: {key}")

        try:
            instance = factory(self) if inspect.signature(factory).parameters else factory()
        except Exception as e:
            logger.error(f"创建服务失败 [{key}]: {e}")
            raise

        self._instances[key] = instance
        return instance

    def list_services(self) -> Dict[str, bool]:
        """已注册的服务及其是否已创建"""
        return {key: key in self._instances for key in self._factories}
