"""Order book helpers: level parsing and the price-impact walk."""

from __future__ import annotations

from typing import Any, Callable, Iterable, List

from pydantic import ValidationError

from bfxconn.models import BookLevel


def parse_levels(
    raw: Any, on_error: Callable[[Any, Exception], None] | None = None
) -> List[BookLevel]:
    """Return :class:`BookLevel` entries parsed from *raw*, preserving order.

    Accepts flexible level formats commonly returned by exchange clients:
    - dicts with ``price``/``amount`` keys (Bitfinex v1)
    - ``(price, amount)`` tuples or lists (only first two fields used)
    Unparseable entries are reported to *on_error* and skipped.
    """

    if not isinstance(raw, (list, tuple)):
        return []

    levels: list[BookLevel] = []
    for entry in raw:
        if isinstance(entry, (list, tuple)) and len(entry) >= 2:
            entry = {"price": entry[0], "amount": entry[1]}
        try:
            levels.append(BookLevel.model_validate(entry))
        except ValidationError as exc:
            if on_error is not None:
                on_error(entry, exc)
    return levels


def limit_price_for_volume(
    levels: Iterable[BookLevel],
    volume: float,
    factor: float = 1.0,
    on_level: Callable[[BookLevel], None] | None = None,
) -> float:
    """Return the worst price needed to absorb ``|volume| * factor``.

    Levels are walked best to worst, summing amounts, and the walk stops at
    the first level where the running total reaches the target. When the book
    runs out first, the price of the last level is returned; an empty book
    yields ``0.0``.

    Args:
        levels: Book side ordered from best to worst price.
        volume: Target size; only its magnitude is used.
        factor: Depth multiplier (>= 1.0) covering slippage and partial fills.
        on_level: Optional callback invoked for every examined level.
    """

    target = abs(volume) * factor
    filled = 0.0
    price = 0.0
    for level in levels:
        price = level.price
        if on_level is not None:
            on_level(level)
        filled += level.amount
        if filled >= target:
            break
    return price


__all__ = ["parse_levels", "limit_price_for_volume"]
