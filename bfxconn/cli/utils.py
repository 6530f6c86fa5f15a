"""Shared helpers used across bfxconn CLI command modules."""

from __future__ import annotations

import logging
from typing import NoReturn

import typer

from bfxconn.adapters import BitfinexAdapter, ExchangeAdapter
from bfxconn.config import Settings, settings
from bfxconn.errors import BfxError
from bfxconn.models import Quote

log = logging.getLogger("bfxconn")


def build_adapter(params: Settings | None = None) -> ExchangeAdapter:
    """Factory for constructing the venue adapter."""

    return BitfinexAdapter(params or settings, log=log)


def format_quote(symbol: str, quote: Quote) -> str:
    """Return a one-line ``bid/ask/spread`` summary."""

    return (
        f"{symbol} bid={quote.bid:.10g} ask={quote.ask:.10g} "
        f"spread={quote.spread:.10g}"
    )


def fail(action: str, exc: BfxError) -> NoReturn:
    """Log *exc* for *action* and exit with status 1."""

    log.error("%s failed: %s", action, exc)
    typer.echo(f"error: {exc}", err=True)
    raise typer.Exit(code=1)


__all__ = ["build_adapter", "fail", "format_quote"]
