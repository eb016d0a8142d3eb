"""
测试公共夹具
"""

import os
import sys
from datetime import datetime, timedelta, timezone

import pytest

# 将项目根目录添加到 sys.path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from infrastructure.backends import MemoryStorage
from infrastructure.storage import LocalStorage


class FakeClock:
    """可控时钟：每次调用前进 step"""

    def __init__(self, start: datetime = None, step: timedelta = timedelta(seconds=1)):
        self.current = start or datetime(2026, 10, 19, 8, 30, 0, 123000, tzinfo=timezone.utc)
        self.step = step
        self.calls = 0

    def __call__(self) -> datetime:
        now = self.current
        self.current = self.current + self.step
        self.calls += 1
        return now

    def freeze(self):
        """停止前进，模拟同一毫秒内的多次调用"""
        self.step = timedelta(0)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def backend():
    return MemoryStorage()


@pytest.fixture
def storage(backend):
    return LocalStorage(backend)
