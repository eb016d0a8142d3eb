"""基础设施模块"""

from .backends import MemoryStorage, SQLiteStorage
from .container import Container
from .exceptions import (
    StorageError,
    StorageAccessError,
    StorageQuotaExceededError,
    SerializationError,
)
from .storage import LocalStorage

__all__ = [
    # backends
    "MemoryStorage",
    "SQLiteStorage",
    # container
    "Container",
    # exceptions
    "StorageError",
    "StorageAccessError",
    "StorageQuotaExceededError",
    "SerializationError",
    # storage
    "LocalStorage",
]
