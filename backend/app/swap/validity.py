"""Submit gate for a swap."""

from __future__ import annotations

from .models import SwapState


def is_valid(state: SwapState) -> bool:
    """Whether the exchange action may be submitted for this state.

    Requires both amounts to be positive, both assets to be chosen, and the
    two assets to differ.
    """
    if state.send_amount is None or state.receive_amount is None:
        return False
    if not state.send_asset or not state.receive_asset:
        return False
    if state.send_asset == state.receive_asset:
        return False
    return state.send_amount > 0 and state.receive_amount > 0
