#!/usr/bin/env python3
"""
本地状态 CLI 工具

启动应用上下文并查看/维护本地存储中的状态:
- 登录状态与订单统计
- 订单、想看、约看列表
- 清空订单、退出登录
"""

import argparse
import json
import logging
import sys

from app.context import AppContext, create_app_context
from config.settings import get_settings
from monitoring import setup_logging


def _print_json(data):
    print(json.dumps(data, ensure_ascii=False, indent=2))


def cmd_status(ctx: AppContext, args):
    """登录状态与订单统计"""
    session = ctx.session.snapshot()
    _print_json({
        "isLoggedIn": session.is_logged_in,
        "userInfo": session.profile,
        "orderStats": ctx.orders.get_order_stats(),
        "wantCount": ctx.want_list.count(),
        "appointmentCount": ctx.appointments.count(),
        "storage": ctx.storage.stats()
    })


def cmd_orders(ctx: AppContext, args):
    """打印订单列表"""
    _print_json(ctx.orders.orders.value)


def cmd_wants(ctx: AppContext, args):
    """打印想看列表"""
    _print_json(ctx.want_list.get_list())


def cmd_appointments(ctx: AppContext, args):
    """打印约看列表"""
    _print_json(ctx.appointments.get_list())


def cmd_clear_orders(ctx: AppContext, args):
    """清空订单"""
    total = ctx.orders.get_order_stats()["total"]
    ctx.orders.clear_orders()
    print(f"已清空 {total} 个订单")


def cmd_logout(ctx: AppContext, args):
    """退出登录"""
    ctx.session.logout()
    print("已退出登录")


COMMANDS = {
    "status": cmd_status,
    "orders": cmd_orders,
    "wants": cmd_wants,
    "appointments": cmd_appointments,
    "clear-orders": cmd_clear_orders,
    "logout": cmd_logout,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="租房浏览本地状态工具")
    parser.add_argument("command", choices=sorted(COMMANDS), help="要执行的命令")
    parser.add_argument("--db", help="SQLite 存储文件路径（覆盖 STORAGE_PATH）")
    parser.add_argument("--verbose", "-v", action="store_true", help="输出调试日志")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    settings = get_settings()
    if args.db:
        settings = settings.model_copy(
            update={"storage": settings.storage.model_copy(update={"path": args.db, "backend": "sqlite"})}
        )

    # 日志与命令输出共用 stdout，默认只输出警告以上
    level = logging.DEBUG if args.verbose else max(getattr(logging, settings.logging.level), logging.WARNING)
    setup_logging(level=level, structured=settings.logging.structured)

    with create_app_context(settings) as ctx:
        COMMANDS[args.command](ctx, args)
    return 0


if __name__ == "__main__":
    sys.exit(main())
