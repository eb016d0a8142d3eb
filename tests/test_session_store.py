"""
用户会话 store 测试
"""

import json
import logging

import pytest

from services.session_store import SessionStore


@pytest.fixture
def session(storage):
    return SessionStore(storage)


class TestLoginLogout:
    """登录与退出测试"""

    def test_login_then_logout(self, session, backend):
        """测试登录后退出，两个存储键都被删除"""
        session.login({"name": "张三", "phone": "138****0000"}, "tok1")
        assert session.is_logged_in is True
        assert json.loads(backend.get_item("userInfo")) == {"name": "张三", "phone": "138****0000"}
        assert backend.get_item("token") == "tok1"

        session.logout()

        assert session.is_logged_in is False
        assert session.user_info.value is None
        assert session.token.value == ""
        assert backend.get_item("userInfo") is None
        assert backend.get_item("token") is None

    def test_token_stored_raw(self, session, backend):
        """测试 token 以原始字符串存储"""
        session.login({"name": "李四"}, "eyJhbGciOi.abc")
        assert backend.get_item("token") == "eyJhbGciOi.abc"

    def test_register_is_login(self, session):
        """测试注册后自动登录"""
        session.register({"name": "王五"}, "tok2")
        assert session.is_logged_in is True
        assert session.user_info.value == {"name": "王五"}

    def test_logout_clears_partial_state(self, session, backend):
        """测试只设置了一个字段时退出也会全部清空"""
        session.set_token("only-token")
        assert session.is_logged_in is False

        session.logout()

        assert session.token.value == ""
        assert session.user_info.value is None
        assert backend.keys() == []

    def test_empty_profile_counts_as_present(self, session):
        """测试空对象也算已有用户信息"""
        session.login({}, "tok")
        assert session.is_logged_in is True

    def test_logged_in_requires_token(self, session):
        """测试没有 token 时不算登录"""
        session.set_profile({"name": "张三"})
        assert session.is_logged_in is False
        session.set_token("tok")
        assert session.is_logged_in is True

    def test_logged_in_notifies(self, session):
        """测试登录状态变化通知订阅者"""
        changes = []
        session.logged_in.subscribe(lambda: changes.append(session.is_logged_in))

        session.is_logged_in
        session.login({"name": "张三"}, "tok")

        assert changes
        assert session.is_logged_in is True


class TestUpdateUserInfo:
    """更新用户信息测试"""

    def test_merge_and_persist(self, session, backend):
        """测试合并更新并写入存储"""
        session.login({"name": "张三", "city": "北京"}, "tok")
        session.update_user_info({"city": "上海", "avatar": "a.png"})

        expected = {"name": "张三", "city": "上海", "avatar": "a.png"}
        assert session.user_info.value == expected
        assert json.loads(backend.get_item("userInfo")) == expected

    def test_noop_without_profile(self, session, backend):
        """测试未登录时不做任何事"""
        session.update_user_info({"name": "张三"})

        assert session.user_info.value is None
        assert backend.get_item("userInfo") is None


class TestRestore:
    """从存储恢复测试"""

    def test_restore(self, storage, backend):
        """测试两个键都存在时恢复"""
        backend.set_item("userInfo", json.dumps({"name": "张三"}))
        backend.set_item("token", "tok1")

        session = SessionStore(storage)
        session.restore_from_storage()

        assert session.is_logged_in is True
        assert session.user_info.value == {"name": "张三"}
        assert session.token.value == "tok1"

    def test_restore_requires_both_keys(self, storage, backend):
        """测试只有一个键时不恢复"""
        backend.set_item("userInfo", json.dumps({"name": "张三"}))

        session = SessionStore(storage)
        session.restore_from_storage()

        assert session.is_logged_in is False
        assert session.user_info.value is None
        assert backend.get_item("userInfo") is not None

    @pytest.mark.parametrize("garbage", ["{not json", "[1, 2]", "\"just a string\"", "{\"a\":" * 200000])
    def test_corrupted_forces_logout(self, storage, backend, caplog, garbage):
        """测试数据损坏时记录错误并强制退出登录"""
        backend.set_item("userInfo", garbage)
        backend.set_item("token", "tok1")

        session = SessionStore(storage)
        with caplog.at_level(logging.ERROR):
            session.restore_from_storage()

        assert session.is_logged_in is False
        assert session.token.value == ""
        assert backend.get_item("userInfo") is None
        assert backend.get_item("token") is None
        assert any("恢复用户信息失败" in r.getMessage() for r in caplog.records)

    def test_snapshot(self, session):
        """测试会话快照"""
        session.login({"name": "张三"}, "tok")
        snap = session.snapshot()

        assert snap.is_logged_in is True
        assert snap.to_dict()["userInfo"] == {"name": "张三"}
        snap.profile["name"] = "改名"
        assert session.user_info.value["name"] == "张三"
