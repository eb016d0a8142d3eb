"""
应用上下文测试

同一 SQLite 文件上的两个上下文相当于同源的两个浏览器标签页。
"""

import json

import pytest

from app.context import AppContext, create_app_context, create_backend
from config.settings import Settings, StorageSettings
from infrastructure.backends import MemoryStorage, SQLiteStorage


@pytest.fixture
def sqlite_settings(tmp_path):
    return Settings(storage=StorageSettings(backend="sqlite", path=tmp_path / "local_storage.db"))


def open_tab(settings, clock=None) -> AppContext:
    kwargs = {"clock": clock} if clock else {}
    return create_app_context(settings, **kwargs).startup()


class TestLifecycle:
    """生命周期测试"""

    def test_stores_share_one_storage(self, backend):
        """测试所有 store 共用同一个存储工具"""
        ctx = create_app_context(Settings(), backend=backend)

        assert ctx.session.storage is ctx.storage
        assert ctx.orders.storage is ctx.storage
        assert ctx.want_list.storage is ctx.storage
        assert ctx.appointments.storage is ctx.storage
        assert ctx.backend is backend

    def test_contexts_are_independent(self):
        """测试不同上下文之间没有共享状态"""
        a = create_app_context(Settings(), backend=MemoryStorage()).startup()
        b = create_app_context(Settings(), backend=MemoryStorage()).startup()

        a.session.login({"name": "张三"}, "tok")

        assert a.session is not b.session
        assert b.session.is_logged_in is False

    def test_startup_restores_state(self, backend):
        """测试启动时恢复会话和订单"""
        backend.set_item("userInfo", json.dumps({"name": "张三"}))
        backend.set_item("token", "tok1")
        backend.set_item("orders", json.dumps([{"id": "ORD1", "status": "completed"}]))

        ctx = create_app_context(Settings(), backend=backend)
        assert ctx.started is False

        ctx.startup()

        assert ctx.started is True
        assert ctx.session.is_logged_in is True
        assert ctx.orders.get_order_stats()["completed"] == 1

    def test_startup_with_corrupted_storage(self, backend):
        """测试存储损坏时启动为干净状态"""
        backend.set_item("userInfo", "{broken")
        backend.set_item("token", "tok1")
        backend.set_item("orders", "[broken")

        ctx = create_app_context(Settings(), backend=backend).startup()

        assert ctx.session.is_logged_in is False
        assert ctx.orders.orders.value == []
        assert backend.get_item("token") is None

    def test_startup_with_deeply_nested_garbage(self, backend):
        """测试超深嵌套的损坏数据不会让启动失败"""
        backend.set_item("userInfo", "{\"a\":" * 200000)
        backend.set_item("token", "tok1")
        backend.set_item("orders", "[" * 200000)
        backend.set_item("my_want_list", "[" * 200000)

        ctx = create_app_context(Settings(), backend=backend).startup()

        assert ctx.session.is_logged_in is False
        assert ctx.orders.orders.value == []
        assert ctx.want_list.get_list() == []

    def test_context_manager_closes_backend(self, sqlite_settings):
        """测试 with 语句结束时关闭后端"""
        with create_app_context(sqlite_settings) as ctx:
            ctx.orders.add_order({"propertyId": "P1"})
            backend = ctx.backend
            assert isinstance(backend, SQLiteStorage)

        assert ctx.started is False
        assert backend._local.connection is None


class TestCreateBackend:
    """后端创建测试"""

    def test_memory_backend(self):
        backend = create_backend(Settings(storage=StorageSettings(backend="memory", quota_bytes=10)))
        assert isinstance(backend, MemoryStorage)
        assert backend.quota_bytes == 10

    def test_sqlite_backend(self, sqlite_settings):
        backend = create_backend(sqlite_settings)
        assert isinstance(backend, SQLiteStorage)
        assert backend.db_path == sqlite_settings.storage.path
        backend.close()


class TestSharedStorage:
    """多上下文共享存储测试"""

    def test_state_survives_restart(self, sqlite_settings, clock):
        """测试重启后状态恢复"""
        with open_tab(sqlite_settings, clock) as first:
            first.session.login({"name": "张三"}, "tok1")
            order = first.orders.add_order({"propertyId": "P1"})
            first.want_list.add({"id": "H1"})
            first.appointments.add({"houseId": "H1"})

        with open_tab(sqlite_settings) as second:
            assert second.session.is_logged_in is True
            assert second.orders.get_order(order["id"])["propertyId"] == "P1"
            assert second.want_list.has("H1") is True
            assert second.appointments.count() == 1

    def test_read_through_sees_other_tab(self, sqlite_settings, clock):
        """测试读穿式列表能看到另一个标签页的写入"""
        tab_a = open_tab(sqlite_settings, clock)
        tab_b = open_tab(sqlite_settings, clock)

        tab_a.want_list.add({"id": "H1"})
        assert tab_b.want_list.has("H1") is True

        tab_b.want_list.remove("H1")
        assert tab_a.want_list.has("H1") is False

        tab_a.shutdown()
        tab_b.shutdown()

    def test_cached_orders_last_writer_wins(self, sqlite_settings, clock):
        """测试内存缓存的订单在多标签页下后写者覆盖"""
        tab_a = open_tab(sqlite_settings, clock)
        tab_b = open_tab(sqlite_settings, clock)

        tab_a.orders.add_order({"propertyId": "P1"})
        tab_b.orders.add_order({"propertyId": "P2"})

        with open_tab(sqlite_settings) as reader:
            stored = [o["propertyId"] for o in reader.orders.orders.value]
        assert stored == ["P2"]

        tab_a.shutdown()
        tab_b.shutdown()
