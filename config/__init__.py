"""配置模块"""

from .settings import (
    get_settings,
    reload_settings,
    Settings,
    StorageSettings,
    LoggingSettings,
)

__all__ = [
    "get_settings",
    "reload_settings",
    "Settings",
    "StorageSettings",
    "LoggingSettings",
]
