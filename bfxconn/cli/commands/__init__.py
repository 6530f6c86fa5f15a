"""Grouped Typer command modules for the bfxconn CLI."""

from __future__ import annotations

from . import account, market, orders

__all__ = ["account", "market", "orders"]
