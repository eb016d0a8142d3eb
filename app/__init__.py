"""应用装配模块"""

from .context import AppContext, create_app_context

__all__ = [
    "AppContext",
    "create_app_context",
]
