"""会话数据模型"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class UserSession:
    """当前用户会话快照"""
    profile: Optional[Dict[str, Any]] = None
    token: str = ""

    @property
    def is_logged_in(self) -> bool:
        return self.profile is not None and bool(self.token)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "userInfo": self.profile,
            "token": self.token,
            "isLoggedIn": self.is_logged_in
        }
