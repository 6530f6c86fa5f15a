"""Verbose help content for the bfxconn CLI package."""

from __future__ import annotations

from textwrap import dedent

VERBOSE_GLOBAL_OVERVIEW = dedent(
    """\
    Command reference

    Use ``--help`` for a compact summary of commands.
    Use ``--help-verbose`` either globally for the full catalog or after a command
    to drill into that command's flags, typical output, and operational tips.

    Venue: Bitfinex v1 REST API (BITFINEX_BASE_URL, default https://api.bitfinex.com)
    """
)


VERBOSE_COMMAND_HELP: dict[str, str] = {
    "keys:check": dedent(
        """\
        keys:check
          Purpose:
            Validate API credentials with a signed balance request.
          Usage tips:
            - Set BITFINEX_API_KEY and BITFINEX_API_SECRET (or use a .env file).
            - A venue message such as "Invalid nonce" points at clock skew or a
              key shared with another process.
          Sample output:
            [bitfinex] credentials ok (usd trading balance 1520.4)
        """
    ),
    "quote": dedent(
        """\
        quote
          Purpose:
            Print the ticker bid/ask for BITFINEX_SYMBOL (default btcusd).
          Usage tips:
            - A side printed as 0 means the venue did not return a usable price.
          Sample output:
            btcusd bid=64210.0 ask=64211.0 spread=1.0
        """
    ),
    "balance": dedent(
        """\
        balance CURRENCY
          Purpose:
            Print the amount held in the trading wallet for CURRENCY.
          Sample output:
            usd trading balance 1520.4
        """
    ),
    "position": dedent(
        """\
        position
          Purpose:
            Print the amount of the first open margin position (0 when flat).
        """
    ),
    "limit:price": dedent(
        """\
        limit:price VOLUME
          Purpose:
            Walk the order book and print the worst price needed to absorb
            |VOLUME| x ORDER_BOOK_FACTOR.
          Key flags:
            --bid/--ask   Book side to walk (default: --ask, i.e. buying).
          Sample output:
            asks limit price for 2.0 BTC: 64215.0
        """
    ),
    "order:send": dedent(
        """\
        order:send DIRECTION QUANTITY PRICE
          Purpose:
            Submit a limit order (DIRECTION is buy or sell) and print the order id.
          Key flags:
            --leg [any|long|short]  Entry point used for the order (default: any).
          Usage tips:
            - DRY_RUN=true logs the order and prints 0 without sending it.
        """
    ),
    "order:status": dedent(
        """\
        order:status ORDER_ID
          Purpose:
            Print whether ORDER_ID is complete (no longer live). Id 0 is always
            complete.
        """
    ),
    "monitor": dedent(
        """\
        monitor
          Purpose:
            Poll the ticker and log bid/ask/spread for a fixed duration.
          Key flags:
            --secs INTEGER            Seconds to run (default: 20).
            --interval FLOAT          Seconds between polls (default: 1.0).
            --metrics/--no-metrics    Serve Prometheus metrics on PROM_PORT.
        """
    ),
}
