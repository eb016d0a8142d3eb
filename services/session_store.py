"""用户会话 store"""

import json
import logging
from typing import Any, Dict, Optional

from core.reactive import Ref, Computed
from core.types import StorageKey
from infrastructure.storage import LocalStorage
from models.session import UserSession

logger = logging.getLogger(__name__)


class SessionStore:
    """用户会话 store（内存缓存 + 写穿持久化）

    状态保存在内存 Ref 中，读取不回查存储；每次修改后调用 persist()。
    """

    def __init__(self, storage: LocalStorage):
        self.storage = storage
        self.user_info: Ref[Optional[Dict[str, Any]]] = Ref(None)
        self.token: Ref[str] = Ref("")
        self.logged_in: Computed[bool] = Computed(
            lambda: self.user_info.value is not None and bool(self.token.value),
            self.user_info,
            self.token
        )

    @property
    def is_logged_in(self) -> bool:
        return self.logged_in.value

    def snapshot(self) -> UserSession:
        """当前会话快照"""
        profile = self.user_info.value
        return UserSession(profile=dict(profile) if profile is not None else None, token=self.token.value)

    # ==================== 修改操作 ====================

    def set_profile(self, info: Optional[Dict[str, Any]]):
        """设置用户信息"""
        self.user_info.value = info
        self.persist()

    def set_token(self, token: str):
        """设置 token"""
        self.token.value = token or ""
        self.persist()

    def login(self, user_data: Dict[str, Any], token: str):
        """登录：同时设置用户信息和 token 并写入存储"""
        self.user_info.value = user_data
        self.token.value = token or ""
        self.persist()
        logger.info("用户已登录")

    def register(self, user_data: Dict[str, Any], token: str):
        """注册（注册后自动登录）"""
        self.login(user_data, token)

    def logout(self):
        """退出登录：两个字段一起清空，删除两个存储键"""
        self.user_info.value = None
        self.token.value = ""
        self.persist()
        logger.info("用户已退出登录")

    def update_user_info(self, updates: Dict[str, Any]):
        """合并更新用户信息，未登录时不做任何事"""
        if self.user_info.value is None:
            return
        self.user_info.value = {**self.user_info.value, **updates}
        self.persist()

    # ==================== 持久化 ====================

    def persist(self):
        """把当前会话写入存储；空字段对应的键被删除"""
        profile = self.user_info.value
        if profile is None:
            self.storage.remove_item(StorageKey.USER_INFO.value)
        else:
            self.storage.set_storage(StorageKey.USER_INFO.value, profile)

        if self.token.value:
            self.storage.set_item(StorageKey.TOKEN.value, self.token.value)
        else:
            self.storage.remove_item(StorageKey.TOKEN.value)

    def restore_from_storage(self):
        """从存储恢复会话

        两个键都存在时才恢复；解析失败时强制退出登录。
        """
        stored_user_info = self.storage.get_item(StorageKey.USER_INFO.value)
        stored_token = self.storage.get_item(StorageKey.TOKEN.value)
        if not stored_user_info or not stored_token:
            return

        try:
            profile = json.loads(stored_user_info)
            if not isinstance(profile, dict):
                raise ValueError(f"用户信息应为对象，实际为 {type(profile).__name__}")
        except (ValueError, RecursionError) as e:
            logger.error(f"恢复用户信息失败: {e}")
            self.logout()
            return

        self.user_info.value = profile
        self.token.value = stored_token
        logger.debug("已从存储恢复用户会话")
