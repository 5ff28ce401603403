"""Pure conversions between the send and receive side of a swap."""

from __future__ import annotations

import math
from collections.abc import Mapping

Amount = float | None


def _prices(
    from_asset: str | None, to_asset: str | None, table: Mapping[str, float]
) -> tuple[float, float] | None:
    if not from_asset or not to_asset:
        return None
    from_price = table.get(from_asset)
    to_price = table.get(to_asset)
    # A zero price would divide into infinity on one side or the other
    if not from_price or not to_price:
        return None
    return from_price, to_price


def _finite_or_none(value: float) -> Amount:
    return value if math.isfinite(value) else None


def received_from_send(
    amount: Amount,
    from_asset: str | None,
    to_asset: str | None,
    table: Mapping[str, float],
) -> Amount:
    """How much of ``to_asset`` ``amount`` of ``from_asset`` buys, or None."""
    if amount is None:
        return None
    prices = _prices(from_asset, to_asset, table)
    if prices is None:
        return None
    from_price, to_price = prices
    return _finite_or_none(amount * from_price / to_price)


def send_from_received(
    amount: Amount,
    from_asset: str | None,
    to_asset: str | None,
    table: Mapping[str, float],
) -> Amount:
    """How much of ``from_asset`` must be sent to receive ``amount`` of ``to_asset``."""
    if amount is None:
        return None
    prices = _prices(from_asset, to_asset, table)
    if prices is None:
        return None
    from_price, to_price = prices
    return _finite_or_none(amount * to_price / from_price)


def parse_amount(raw: str | float | int | None) -> Amount:
    """Turn raw user input into an amount. Blank or garbage input is None."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, str):
        raw = raw.strip()
        if not raw:
            return None
    try:
        value = float(raw)
    except ValueError:
        return None
    return _finite_or_none(value)
