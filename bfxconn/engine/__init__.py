"""Calculation helpers for order book pricing."""

from __future__ import annotations

from .depth import limit_price_for_volume, parse_levels

__all__ = ["limit_price_for_volume", "parse_levels"]
