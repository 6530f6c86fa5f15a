"""Market data CLI commands."""

from __future__ import annotations

import time

import typer

from bfxconn.config import settings
from bfxconn.errors import BfxError
from bfxconn.metrics.exporter import ERRORS_TOTAL, start_metrics_server

from .. import utils
from ..core import app, log


@app.command("quote")
def quote() -> None:
    """Print the ticker bid/ask for the configured symbol."""

    adapter = utils.build_adapter()
    try:
        q = adapter.quote()
    except BfxError as exc:
        utils.fail("quote", exc)
    typer.echo(utils.format_quote(settings.bitfinex_symbol, q))


# Volume is signed; let "-2" reach the argument instead of the option parser.
_SIGNED_ARGS = {"ignore_unknown_options": True}


@app.command("limit:price", context_settings=_SIGNED_ARGS)
@app.command("limit_price", context_settings=_SIGNED_ARGS)
def limit_price(
    volume: float,
    bid: bool = typer.Option(False, "--bid/--ask", help="Book side to walk."),
) -> None:
    """Print the price needed to absorb VOLUME on one side of the book."""

    adapter = utils.build_adapter()
    try:
        price = adapter.limit_price(volume, bid)
    except BfxError as exc:
        utils.fail("limit:price", exc)
    side = "bids" if bid else "asks"
    base = settings.bitfinex_symbol[:3].upper()
    typer.echo(f"{side} limit price for {abs(volume)} {base}: {price:.10g}")


@app.command("monitor")
def monitor(
    secs: int = 20,
    interval: float = 1.0,
    metrics: bool = typer.Option(False, "--metrics/--no-metrics"),
) -> None:
    """Poll the ticker and print bid/ask/spread for SECS seconds."""

    if metrics:
        start_metrics_server(settings.prom_port)
        log.info("metrics served on :%s", settings.prom_port)

    adapter = utils.build_adapter()
    start = time.time()
    samples = failures = 0
    while time.time() - start < secs:
        try:
            q = adapter.quote()
        except BfxError as exc:
            failures += 1
            ERRORS_TOTAL.labels(adapter.name(), "monitor").inc()
            log.warning("monitor quote failed: %s", exc)
        else:
            samples += 1
            typer.echo(utils.format_quote(settings.bitfinex_symbol, q))
        time.sleep(interval)
    log.info("monitor done samples=%d failures=%d", samples, failures)


__all__ = ["limit_price", "monitor", "quote"]
