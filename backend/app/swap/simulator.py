"""GBM-based offline price feed."""

from __future__ import annotations

import asyncio
import logging
import math
import random
import time

import numpy as np

from .interface import PriceFeedSource
from .models import PriceObservation
from .prices import PriceBook
from .seed_prices import ASSET_PARAMS, DEFAULT_PARAMS, SEED_PRICES, STABLECOINS

logger = logging.getLogger(__name__)


class PriceSimulator:
    """Geometric Brownian Motion over a set of crypto assets.

    Math:
        S(t+dt) = S(t) * exp((mu - sigma^2/2) * dt + sigma * sqrt(dt) * Z)

    Draws are independent per asset. Crypto trades around the clock, so dt is
    a fraction of a calendar year rather than a trading year.
    """

    SECONDS_PER_YEAR = 365 * 24 * 3600
    DEFAULT_DT = 1.0 / SECONDS_PER_YEAR  # one-second ticks

    def __init__(
        self,
        assets: list[str],
        dt: float = DEFAULT_DT,
        event_probability: float = 0.001,
    ) -> None:
        self._dt = dt
        self._event_prob = event_probability
        self._assets: list[str] = []
        self._prices: dict[str, float] = {}
        self._params: dict[str, dict[str, float]] = {}

        for asset in assets:
            self.add_asset(asset)

    @property
    def assets(self) -> list[str]:
        return list(self._assets)

    def step(self) -> dict[str, float]:
        """Advance every asset by one tick. Returns {asset: new_price}."""
        n = len(self._assets)
        if n == 0:
            return {}

        z = np.random.standard_normal(n)
        result: dict[str, float] = {}
        for i, asset in enumerate(self._assets):
            mu = self._params[asset]["mu"]
            sigma = self._params[asset]["sigma"]
            drift = (mu - 0.5 * sigma**2) * self._dt
            diffusion = sigma * math.sqrt(self._dt) * z[i]
            self._prices[asset] *= math.exp(drift + diffusion)

            if asset not in STABLECOINS and random.random() < self._event_prob:
                shock = random.uniform(0.03, 0.10) * random.choice([-1, 1])
                self._prices[asset] *= 1 + shock
                logger.debug("Random event on %s: %+.1f%%", asset, shock * 100)

            result[asset] = self._prices[asset]
        return result

    def add_asset(self, asset: str) -> None:
        """Start simulating an asset. No-op if already present."""
        if asset in self._prices:
            return
        self._assets.append(asset)
        self._prices[asset] = SEED_PRICES.get(asset, random.uniform(0.1, 100.0))
        self._params[asset] = ASSET_PARAMS.get(asset, dict(DEFAULT_PARAMS))

    def get_price(self, asset: str) -> float | None:
        return self._prices.get(asset)

    def observations(self, observed_at: float | None = None) -> list[PriceObservation]:
        """Current prices as a batch of observations sharing one timestamp."""
        ts = observed_at if observed_at is not None else time.time()
        return [
            PriceObservation(asset=asset, price=self._prices[asset], observed_at=ts)
            for asset in self._assets
        ]


class SimulatedPriceFeed(PriceFeedSource):
    """PriceFeedSource backed by PriceSimulator.

    Runs a background asyncio task that steps the simulator every
    ``update_interval`` seconds and publishes the result to the PriceBook.
    """

    def __init__(
        self,
        price_book: PriceBook,
        assets: list[str] | None = None,
        update_interval: float = 1.0,
        event_probability: float = 0.001,
    ) -> None:
        self._book = price_book
        self._assets = list(assets) if assets is not None else list(SEED_PRICES)
        self._interval = update_interval
        self._event_prob = event_probability
        self._sim: PriceSimulator | None = None
        self._task: asyncio.Task | None = None

    async def start(self) -> None:
        self._sim = PriceSimulator(self._assets, event_probability=self._event_prob)
        # Publish seed prices so sessions get defaults before the first tick
        self._book.publish(self._sim.observations())
        self._task = asyncio.create_task(self._run_loop(), name="price-simulator")
        logger.info("Price simulator started with %d assets", len(self._assets))

    async def stop(self) -> None:
        if self._task and not self._task.done():
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
        self._task = None
        logger.info("Price simulator stopped")

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def _run_loop(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            try:
                if self._sim:
                    self._sim.step()
                    self._book.publish(self._sim.observations())
            except Exception:
                logger.exception("Simulator step failed")
