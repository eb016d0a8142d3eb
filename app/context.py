"""
应用上下文

在应用启动时显式创建一次，通过引用传给调用方。负责：
- 装配存储后端、存储工具和四个 store
- startup(): 首次使用前从存储恢复会话和订单
- shutdown(): 释放存储后端
"""

import logging
from typing import Optional

from config.settings import Settings, get_settings
from core.clock import Clock, system_clock
from core.interfaces import KeyValueStorage
from infrastructure.backends import MemoryStorage, SQLiteStorage
from infrastructure.container import Container
from infrastructure.storage import LocalStorage
from monitoring import get_structured_logger
from services.appointment_list import AppointmentList
from services.order_store import OrderStore
from services.session_store import SessionStore
from services.want_list import WantList

logger = logging.getLogger(__name__)
slog = get_structured_logger(__name__)


def create_backend(settings: Settings) -> KeyValueStorage:
    """按配置创建存储后端"""
    storage_settings = settings.storage
    if storage_settings.backend == "memory":
        return MemoryStorage(quota_bytes=storage_settings.quota_bytes)
    return SQLiteStorage(
        db_path=storage_settings.path,
        quota_bytes=storage_settings.quota_bytes,
        timeout=storage_settings.timeout
    )


def setup_default_services(
    container: Container,
    settings: Settings,
    backend: Optional[KeyValueStorage] = None,
    clock: Clock = system_clock
) -> Container:
    """注册上下文所需的全部服务"""
    if backend is not None:
        container.register_instance('backend', backend)
    else:
        container.register_singleton('backend', lambda: create_backend(settings))

    container.register_singleton('storage', lambda c: LocalStorage(c.get('backend')))
    container.register_singleton('session', lambda c: SessionStore(c.get('storage')))
    container.register_singleton('orders', lambda c: OrderStore(c.get('storage'), clock=clock))
    container.register_singleton('want_list', lambda c: WantList(c.get('storage'), clock=clock))
    container.register_singleton('appointments', lambda c: AppointmentList(c.get('storage'), clock=clock))

    logger.debug(f"已注册 {len(container.list_services())} 个服务")
    return container


class AppContext:
    """应用上下文

    Usage:
        with create_app_context() as ctx:
            ctx.session.login({"name": "张三"}, "tok")
            ctx.orders.add_order({"propertyId": "P1"})
    """

    def __init__(self, container: Container, settings: Settings):
        self.container = container
        self.settings = settings
        self._started = False

    @property
    def backend(self) -> KeyValueStorage:
        return self.container.get('backend')

    @property
    def storage(self) -> LocalStorage:
        return self.container.get('storage', LocalStorage)

    @property
    def session(self) -> SessionStore:
        return self.container.get('session', SessionStore)

    @property
    def orders(self) -> OrderStore:
        return self.container.get('orders', OrderStore)

    @property
    def want_list(self) -> WantList:
        return self.container.get('want_list', WantList)

    @property
    def appointments(self) -> AppointmentList:
        return self.container.get('appointments', AppointmentList)

    @property
    def started(self) -> bool:
        return self._started

    def startup(self) -> "AppContext":
        """从存储恢复有内存状态的 store（会话、订单）"""
        if self._started:
            return self
        self.session.restore_from_storage()
        self.orders.restore_from_storage()
        self._started = True
        slog.info(
            "context_started",
            logged_in=self.session.is_logged_in,
            orders=self.orders.get_order_stats()["total"]
        )
        return self

    def shutdown(self):
        """释放存储后端"""
        if not self._started:
            return
        self.backend.close()
        self._started = False
        slog.info("context_stopped")

    def __enter__(self) -> "AppContext":
        return self.startup()

    def __exit__(self, exc_type, exc, tb):
        self.shutdown()


def create_app_context(
    settings: Optional[Settings] = None,
    backend: Optional[KeyValueStorage] = None,
    clock: Clock = system_clock
) -> AppContext:
    """创建应用上下文（尚未启动）

    Args:
        settings: 应用配置，默认读取环境变量
        backend: 指定存储后端，默认按配置创建
        clock: 时钟，测试时可注入
    """
    settings = settings or get_settings()
    container = setup_default_services(Container(), settings, backend=backend, clock=clock)
    return AppContext(container, settings)
