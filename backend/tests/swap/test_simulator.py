"""Tests for PriceSimulator and SimulatedPriceFeed."""

import asyncio

import pytest

from app.swap.prices import PriceBook
from app.swap.seed_prices import SEED_PRICES, STABLECOINS
from app.swap.simulator import PriceSimulator, SimulatedPriceFeed


class TestPriceSimulator:
    """Unit tests for the GBM price simulator."""

    def test_step_returns_all_assets(self):
        sim = PriceSimulator(assets=["BTC", "ETH"])
        assert set(sim.step()) == {"BTC", "ETH"}

    def test_prices_stay_positive(self):
        """GBM prices can never go negative (exp() is always positive)."""
        sim = PriceSimulator(assets=["SWTH"], event_probability=0.5)
        for _ in range(5_000):
            assert sim.step()["SWTH"] > 0

    def test_initial_prices_match_seeds(self):
        sim = PriceSimulator(assets=["ETH"])
        assert sim.get_price("ETH") == SEED_PRICES["ETH"]

    def test_unknown_asset_gets_random_seed(self):
        sim = PriceSimulator(assets=["ZZZ"])
        assert 0.1 <= sim.get_price("ZZZ") <= 100.0

    def test_add_duplicate_is_noop(self):
        sim = PriceSimulator(assets=["BTC"])
        sim.add_asset("BTC")
        assert sim.assets == ["BTC"]

    def test_empty_step(self):
        assert PriceSimulator(assets=[]).step() == {}

    def test_get_price_unknown(self):
        assert PriceSimulator(assets=["BTC"]).get_price("NOPE") is None

    def test_stablecoins_hold_peg(self):
        """Stablecoins drift very little even with frequent shock events."""
        stable = sorted(STABLECOINS)
        sim = PriceSimulator(assets=stable, event_probability=1.0)
        for _ in range(1_000):
            sim.step()
        for asset in stable:
            assert sim.get_price(asset) == pytest.approx(SEED_PRICES[asset], rel=0.01)

    def test_observations_share_timestamp(self):
        sim = PriceSimulator(assets=["BTC", "ETH"])
        obs = sim.observations(observed_at=123.0)
        assert [o.asset for o in obs] == ["BTC", "ETH"]
        assert {o.observed_at for o in obs} == {123.0}
        assert obs[0].price == SEED_PRICES["BTC"]


@pytest.mark.asyncio
class TestSimulatedPriceFeed:
    """Integration tests for SimulatedPriceFeed."""

    async def test_start_publishes_immediately(self):
        book = PriceBook()
        feed = SimulatedPriceFeed(book, assets=["BTC", "ETH"], update_interval=10.0)
        await feed.start()

        assert book.table.assets == ["BTC", "ETH"]
        assert book.version == 1
        assert feed.is_running

        await feed.stop()

    async def test_default_assets_are_seeds(self):
        book = PriceBook()
        feed = SimulatedPriceFeed(book, update_interval=10.0)
        await feed.start()
        assert book.table.assets == list(SEED_PRICES)
        await feed.stop()

    async def test_prices_update_over_time(self):
        book = PriceBook()
        feed = SimulatedPriceFeed(book, assets=["BTC"], update_interval=0.02)
        await feed.start()

        initial_version = book.version
        await asyncio.sleep(0.15)
        assert book.version > initial_version

        await feed.stop()

    async def test_stop_is_clean(self):
        book = PriceBook()
        feed = SimulatedPriceFeed(book, assets=["BTC"], update_interval=0.05)
        await feed.start()
        await feed.stop()
        await feed.stop()  # Double stop should not raise
        assert not feed.is_running

    async def test_empty_start(self):
        book = PriceBook()
        feed = SimulatedPriceFeed(book, assets=[], update_interval=0.05)
        await feed.start()
        assert not book.available
        await feed.stop()
