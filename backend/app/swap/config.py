"""Environment-driven settings for the swap subsystem."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_DELAY = 0.25  # seconds
DEFAULT_POLL_INTERVAL = 30.0
DEFAULT_SIMULATOR_INTERVAL = 1.0


def _float_env(environ: Mapping[str, str], name: str, default: float) -> float:
    raw = environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r (not a number), using %s", name, raw, default)
        return default


@dataclass(frozen=True, slots=True)
class SwapConfig:
    """Tunables for sessions and price feeds.

    - SWAP_DEBOUNCE_SECONDS   quiet period before the peer amount is recomputed
    - SWAP_PRICES_URL         JSON price feed; empty means use the simulator
    - SWAP_POLL_INTERVAL      seconds between HTTP feed polls
    - SWAP_SIMULATOR_INTERVAL seconds between simulator ticks
    """

    debounce_delay: float = DEFAULT_DEBOUNCE_DELAY
    prices_url: str = ""
    poll_interval: float = DEFAULT_POLL_INTERVAL
    simulator_interval: float = DEFAULT_SIMULATOR_INTERVAL

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> SwapConfig:
        env = os.environ if environ is None else environ
        return cls(
            debounce_delay=_float_env(env, "SWAP_DEBOUNCE_SECONDS", DEFAULT_DEBOUNCE_DELAY),
            prices_url=env.get("SWAP_PRICES_URL", "").strip(),
            poll_interval=_float_env(env, "SWAP_POLL_INTERVAL", DEFAULT_POLL_INTERVAL),
            simulator_interval=_float_env(
                env, "SWAP_SIMULATOR_INTERVAL", DEFAULT_SIMULATOR_INTERVAL
            ),
        )
