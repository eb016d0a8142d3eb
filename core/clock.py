"""时间工具：时钟注入与时间戳格式化"""

from datetime import datetime, timedelta, timezone
from typing import Callable

from .types import LOCAL_TIME_FORMAT

# 时钟：返回带时区的当前时间
Clock = Callable[[], datetime]

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def system_clock() -> datetime:
    """系统时钟（UTC）"""
    return datetime.now(timezone.utc)


def epoch_millis(dt: datetime) -> int:
    """毫秒时间戳"""
    return (dt - _EPOCH) // timedelta(milliseconds=1)


def iso_timestamp(dt: datetime) -> str:
    """ISO-8601 UTC 时间戳，毫秒精度，Z 结尾

    例如 2026-10-19T08:30:00.123Z
    """
    utc = dt.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def local_timestamp(dt: datetime) -> str:
    """本地时间显示串，例如 2026-10-19 16:30"""
    return dt.astimezone().strftime(LOCAL_TIME_FORMAT)
