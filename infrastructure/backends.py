"""
本地键值存储后端

提供内存和 SQLite 两种 KeyValueStorage 实现。
同一个 SQLite 文件被多个上下文打开时，相当于浏览器中同源的多个标签页。
"""

import sqlite3
import threading
import logging
from typing import Dict, List, Optional
from contextlib import contextmanager
from pathlib import Path

from core.interfaces import KeyValueStorage
from core.types import DEFAULT_QUOTA_BYTES
from .exceptions import StorageAccessError, StorageQuotaExceededError

logger = logging.getLogger(__name__)

# 默认数据库路径 (项目根目录的 data 文件夹)
DEFAULT_DB_PATH = Path(__file__).parent.parent / "data" / "local_storage.db"


def _check_quota(key: str, value: str, used: int, quota: int):
    """写入前检查配额，quota <= 0 表示不限制"""
    if quota <= 0:
        return
    required = used + len(key) + len(value)
    if required > quota:
        raise StorageQuotaExceededError(key, required, quota)


class MemoryStorage(KeyValueStorage):
    """内存存储

    进程退出即丢失，用于测试和临时上下文。
    """

    def __init__(self, quota_bytes: int = DEFAULT_QUOTA_BYTES):
        self._data: Dict[str, str] = {}
        self._lock = threading.Lock()
        self.quota_bytes = quota_bytes

    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            _check_quota(key, value, self._usage(exclude_key=key), self.quota_bytes)
            self._data[key] = value

    def remove_item(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def keys(self) -> List[str]:
        with self._lock:
            return list(self._data.keys())

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    def usage_bytes(self, exclude_key: Optional[str] = None) -> int:
        with self._lock:
            return self._usage(exclude_key)

    def _usage(self, exclude_key: Optional[str] = None) -> int:
        return sum(
            len(k) + len(v) for k, v in self._data.items()
            if k != exclude_key
        )

    def __len__(self) -> int:
        return len(self._data)


class SQLiteStorage(KeyValueStorage):
    """SQLite 存储（线程本地连接）

    特性:
    - 每线程一个连接
    - WAL 模式，多个上下文可共享同一文件
    - 写操作加锁，单次写入不会被撕裂
    """

    def __init__(
        self,
        db_path: Optional[Path] = None,
        quota_bytes: int = DEFAULT_QUOTA_BYTES,
        timeout: float = 30.0
    ):
        self.db_path = Path(db_path) if db_path else DEFAULT_DB_PATH
        self.quota_bytes = quota_bytes
        self.timeout = timeout
        self._local = threading.local()
        self._write_lock = threading.Lock()

        # 确保目录存在
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageAccessError(f"无法创建存储目录: {self.db_path.parent}", original_error=e)

        self._init_tables()
        logger.info(f"本地存储初始化完成: {self.db_path}")

    def _get_connection(self) -> sqlite3.Connection:
        """获取当前线程的数据库连接"""
        if getattr(self._local, "connection", None) is None:
            try:
                conn = sqlite3.connect(
                    str(self.db_path),
                    check_same_thread=False,
                    timeout=self.timeout,
                    isolation_level=None  # 自动提交模式，配合 WAL
                )
                conn.execute("PRAGMA journal_mode = WAL")
                conn.execute("PRAGMA synchronous = NORMAL")
                self._local.connection = conn
                logger.debug(f"创建新存储连接: {self.db_path}")
            except sqlite3.Error as e:
                raise StorageAccessError(f"存储连接失败: {e}", original_error=e)

        return self._local.connection

    @contextmanager
    def get_cursor(self, write: bool = False):
        """获取数据库游标的上下文管理器

        Args:
            write: 是否是写操作（需要加锁）
        """
        conn = self._get_connection()

        if write:
            self._write_lock.acquire()

        try:
            cursor = conn.cursor()
            yield cursor
        except sqlite3.Error as e:
            raise StorageAccessError(f"存储操作失败: {e}", original_error=e)
        finally:
            if write:
                self._write_lock.release()

    def _init_tables(self):
        """初始化存储表"""
        with self.get_cursor(write=True) as cursor:
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
            """)

    def get_item(self, key: str) -> Optional[str]:
        with self.get_cursor() as cursor:
            cursor.execute("SELECT value FROM kv_store WHERE key = ?", (key,))
            row = cursor.fetchone()
        return row[0] if row else None

    def set_item(self, key: str, value: str) -> None:
        with self.get_cursor(write=True) as cursor:
            if self.quota_bytes > 0:
                cursor.execute(
                    "SELECT COALESCE(SUM(LENGTH(key) + LENGTH(value)), 0) "
                    "FROM kv_store WHERE key != ?",
                    (key,)
                )
                _check_quota(key, value, cursor.fetchone()[0], self.quota_bytes)
            cursor.execute(
                "INSERT OR REPLACE INTO kv_store (key, value) VALUES (?, ?)",
                (key, value)
            )

    def remove_item(self, key: str) -> None:
        with self.get_cursor(write=True) as cursor:
            cursor.execute("DELETE FROM kv_store WHERE key = ?", (key,))

    def keys(self) -> List[str]:
        with self.get_cursor() as cursor:
            cursor.execute("SELECT key FROM kv_store ORDER BY key")
            return [row[0] for row in cursor.fetchall()]

    def clear(self) -> None:
        with self.get_cursor(write=True) as cursor:
            cursor.execute("DELETE FROM kv_store")

    def usage_bytes(self, exclude_key: Optional[str] = None) -> int:
        with self.get_cursor() as cursor:
            cursor.execute(
                "SELECT COALESCE(SUM(LENGTH(key) + LENGTH(value)), 0) "
                "FROM kv_store WHERE key != ?",
                (exclude_key or "",)
            )
            return cursor.fetchone()[0]

    def close(self):
        """关闭当前线程的连接"""
        conn = getattr(self._local, "connection", None)
        if conn is not None:
            conn.close()
            self._local.connection = None
            logger.debug(f"存储连接已关闭: {self.db_path}")
