"""Build the record handed to the exchange executor."""

from __future__ import annotations

from collections.abc import Mapping

from .models import ExchangeSummary, SwapState


def approx_usd(amount: float | None, asset: str | None, table: Mapping[str, float]) -> float:
    """USD value of an amount. Missing amount, asset or price counts as 0."""
    if amount is None or not asset:
        return 0.0
    price = table.get(asset)
    if not price:
        return 0.0
    return amount * price


def build_summary(state: SwapState, table: Mapping[str, float]) -> ExchangeSummary:
    """Snapshot a swap into an ExchangeSummary.

    Does not validate; callers check ``is_valid`` first. Empty amounts become 0.
    """
    return ExchangeSummary(
        send_amount=state.send_amount if state.send_amount is not None else 0.0,
        receive_amount=state.receive_amount if state.receive_amount is not None else 0.0,
        approx_usd_send_amount=approx_usd(state.send_amount, state.send_asset, table),
        approx_usd_receive_amount=approx_usd(state.receive_amount, state.receive_asset, table),
        send_asset=state.send_asset or "",
        receive_asset=state.receive_asset or "",
    )
