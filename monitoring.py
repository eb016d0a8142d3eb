"""
结构化日志模块

提供 JSON 结构化日志、敏感信息屏蔽和日志系统初始化。
"""

import re
import sys
import json
import logging
from datetime import datetime, timezone

# ==================== 结构化日志 ====================

class StructuredFormatter(logging.Formatter):
    """结构化日志格式化器

    输出 JSON 格式的日志，便于日志聚合和分析。
    """

    def __init__(self, service_name: str = "rental-local-state"):
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": self.service_name,
        }

        # 添加位置信息
        if record.pathname:
            log_data["location"] = {
                "file": record.filename,
                "line": record.lineno,
                "function": record.funcName
            }

        # 添加额外字段
        if hasattr(record, 'extra_data'):
            log_data["data"] = record.extra_data

        # 添加异常信息
        if record.exc_info:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "traceback": self.formatException(record.exc_info)
            }

        return json.dumps(log_data, ensure_ascii=False, default=str)


class SensitiveDataFilter(logging.Filter):
    """敏感数据过滤器

    自动屏蔽日志中的 token、密码等敏感信息。
    """

    SENSITIVE_PATTERNS = [
        'password', 'passwd', 'pwd',
        'token', 'secret', 'credential',
        'authorization', 'auth'
    ]

    MASK_RULES = [
        (r'(["\']?token["\']?\s*[=:]\s*)["\']?([^"\'\s,}]+)["\']?', r'\1****'),
        (r'(["\']?password["\']?\s*[=:]\s*)["\']?([^"\'\s,}]+)["\']?', r'\1****'),
        (r'(["\']?secret["\']?\s*[=:]\s*)["\']?([^"\'\s,}]+)["\']?', r'\1****'),
        (r'(bearer\s+)([A-Za-z0-9._\-]+)', r'\1****'),
    ]

    def filter(self, record: logging.LogRecord) -> bool:
        if not isinstance(record.msg, str):
            return True
        msg = record.getMessage().lower()
        for pattern in self.SENSITIVE_PATTERNS:
            if pattern in msg:
                record.msg = self._mask_sensitive(record.getMessage())
                record.args = None
                break
        return True

    def _mask_sensitive(self, text: str) -> str:
        """屏蔽敏感值"""
        result = text
        for pattern, replacement in self.MASK_RULES:
            result = re.sub(pattern, replacement, result, flags=re.IGNORECASE)
        return result


class StructuredLogger:
    """结构化日志记录器

    提供便捷的 key=value 结构化日志方法。
    """

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def _log(self, level: int, message: str, **kwargs):
        self.logger.log(level, message, extra={'extra_data': kwargs})

    def info(self, message: str, **kwargs):
        self._log(logging.INFO, message, **kwargs)


def get_structured_logger(name: str = "app") -> StructuredLogger:
    """获取结构化日志记录器"""
    return StructuredLogger(name)


def setup_logging(
    level: int = logging.INFO,
    structured: bool = True,
    service_name: str = "rental-local-state"
):
    """配置日志系统

    Args:
        level: 日志级别
        structured: 是否使用结构化日志格式
        service_name: 服务名称
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # 清除现有处理器
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)

    if structured:
        handler.setFormatter(StructuredFormatter(service_name))
    else:
        handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        ))

    # 添加敏感数据过滤器
    handler.addFilter(SensitiveDataFilter())

    root_logger.addHandler(handler)

    logging.info(f"日志系统已配置: level={logging.getLevelName(level)}, structured={structured}")
