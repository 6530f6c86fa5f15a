"""Order placement and status CLI commands."""

from __future__ import annotations

from enum import Enum

import typer

from bfxconn.errors import BfxError

from .. import utils
from ..core import app


class Leg(str, Enum):
    any = "any"
    long = "long"
    short = "short"


@app.command("order:send")
@app.command("order_send")
def order_send(
    direction: str,
    quantity: float,
    price: float,
    leg: Leg = typer.Option(Leg.any, help="Entry point used for the order."),
) -> None:
    """Submit a limit order and print the venue order id."""

    adapter = utils.build_adapter()
    send = {
        Leg.any: adapter.send_order,
        Leg.long: adapter.send_long_order,
        Leg.short: adapter.send_short_order,
    }[leg]
    try:
        order_id = send(direction, quantity, price)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="DIRECTION") from exc
    except BfxError as exc:
        utils.fail("order:send", exc)
    typer.echo(f"order id {order_id}")


@app.command("order:status")
@app.command("order_status")
def order_status(order_id: str) -> None:
    """Print whether ORDER_ID is complete."""

    adapter = utils.build_adapter()
    try:
        done = adapter.is_order_complete(order_id)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="ORDER_ID") from exc
    except BfxError as exc:
        utils.fail("order:status", exc)
    typer.echo(f"order {order_id} {'complete' if done else 'live'}")


__all__ = ["Leg", "order_send", "order_status"]
