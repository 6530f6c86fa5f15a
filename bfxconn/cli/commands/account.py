"""Account inspection CLI commands."""

from __future__ import annotations

import typer

from bfxconn.errors import BfxError

from .. import utils
from ..core import app, log


@app.command("balance")
def balance(currency: str) -> None:
    """Print the trading wallet balance for CURRENCY."""

    adapter = utils.build_adapter()
    try:
        amount = adapter.balance(currency)
    except BfxError as exc:
        utils.fail("balance", exc)
    typer.echo(f"{currency.lower()} trading balance {amount:.10g}")


@app.command("position")
def position() -> None:
    """Print the size of the open position."""

    adapter = utils.build_adapter()
    try:
        amount = adapter.active_position()
    except BfxError as exc:
        utils.fail("position", exc)
    typer.echo(f"position {amount:.10g}")


@app.command("keys:check")
@app.command("keys_check")
def keys_check(currency: str = "usd") -> None:
    """Validate credentials with a signed balance request."""

    adapter = utils.build_adapter()
    try:
        amount = adapter.balance(currency)
    except BfxError as exc:
        utils.fail("keys:check", exc)
    log.info("[%s] credentials ok", adapter.name())
    typer.echo(
        f"[{adapter.name()}] credentials ok "
        f"({currency.lower()} trading balance {amount:.10g})"
    )


__all__ = ["balance", "keys_check", "position"]
