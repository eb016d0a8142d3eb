"""
配置管理系统

使用 Pydantic Settings 管理应用配置，支持环境变量和 .env 文件。
"""

import logging
from typing import Optional
from pathlib import Path
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.types import DEFAULT_QUOTA_BYTES

logger = logging.getLogger(__name__)


class StorageSettings(BaseSettings):
    """本地存储相关配置"""
    model_config = SettingsConfigDict(env_prefix="STORAGE_")

    backend: str = Field(default="sqlite", description="存储后端 (sqlite/memory)")
    path: Path = Field(
        default=Path("data/local_storage.db"),
        description="SQLite 存储文件路径"
    )
    quota_bytes: int = Field(default=DEFAULT_QUOTA_BYTES, ge=0, description="存储配额，0 表示不限制")
    timeout: float = Field(default=30.0, ge=1.0, le=120.0, description="SQLite 锁等待超时(秒)")

    @field_validator('backend')
    @classmethod
    def validate_backend(cls, v: str) -> str:
        valid_backends = ['sqlite', 'memory']
        v = v.lower()
        if v not in valid_backends:
            raise ValueError(f"无效的存储后端: {v}, 有效值: {valid_backends}")
        return v


class LoggingSettings(BaseSettings):
    """日志相关配置"""
    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: str = Field(default="INFO", description="日志级别")
    format: str = Field(default="structured", description="日志格式 (structured/plain)")

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        v = v.upper()
        if v not in valid_levels:
            raise ValueError(f"无效的日志级别: {v}, 有效值: {valid_levels}")
        return v

    @property
    def structured(self) -> bool:
        return self.format == "structured"


class Settings(BaseSettings):
    """应用主配置"""
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # 应用信息
    app_name: str = Field(default="租房浏览本地状态层", description="应用名称")
    app_version: str = Field(default="1.0.0", description="应用版本")
    environment: str = Field(default="development", description="运行环境")

    # 子配置
    storage: StorageSettings = Field(default_factory=StorageSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @field_validator('environment')
    @classmethod
    def validate_environment(cls, v: str) -> str:
        valid_envs = ['development', 'staging', 'production', 'testing']
        v = v.lower()
        if v not in valid_envs:
            raise ValueError(f"无效的环境: {v}, 有效值: {valid_envs}")
        return v

    def to_dict(self) -> dict:
        return {
            "app_name": self.app_name,
            "app_version": self.app_version,
            "environment": self.environment,
            "storage": {
                "backend": self.storage.backend,
                "path": str(self.storage.path),
                "quota_bytes": self.storage.quota_bytes
            },
            "logging": {
                "level": self.logging.level,
                "format": self.logging.format
            }
        }


# ==================== 全局实例 ====================

_settings: Optional[Settings] = None


@lru_cache()
def get_settings() -> Settings:
    """获取配置实例（缓存）"""
    global _settings
    if _settings is None:
        _settings = Settings()
        logger.info(f"配置已加载: {_settings.environment} 环境")
    return _settings


def reload_settings() -> Settings:
    """重新加载配置"""
    global _settings
    get_settings.cache_clear()
    _settings = None
    return get_settings()
