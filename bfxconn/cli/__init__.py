"""bfxconn CLI package that exposes the Typer application and command helpers."""

from __future__ import annotations

from .core import CLIApp, app, log

# Import command modules for side-effect registration
from . import commands
from .commands.account import balance, keys_check, position
from .commands.market import limit_price, monitor, quote
from .commands.orders import order_send, order_status

__all__ = [
    "CLIApp",
    "app",
    "balance",
    "commands",
    "keys_check",
    "limit_price",
    "log",
    "monitor",
    "order_send",
    "order_status",
    "position",
    "quote",
]
