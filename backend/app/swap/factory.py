"""Factory for creating price feeds."""

from __future__ import annotations

import logging

from .config import SwapConfig
from .interface import PriceFeedSource
from .prices import PriceBook

logger = logging.getLogger(__name__)


def create_price_feed(price_book: PriceBook, config: SwapConfig | None = None) -> PriceFeedSource:
    """Create the price feed the configuration asks for.

    - SWAP_PRICES_URL set and non-empty → HttpPriceFeed (real prices)
    - Otherwise → SimulatedPriceFeed (GBM simulation)

    Returns an unstarted feed. Caller must await feed.start().
    """
    config = config or SwapConfig.from_env()

    if config.prices_url:
        from .http_feed import HttpPriceFeed

        logger.info("Price feed: HTTP %s", config.prices_url)
        return HttpPriceFeed(
            url=config.prices_url,
            price_book=price_book,
            poll_interval=config.poll_interval,
        )
    else:
        from .simulator import SimulatedPriceFeed

        logger.info("Price feed: GBM simulator")
        return SimulatedPriceFeed(
            price_book=price_book,
            update_interval=config.simulator_interval,
        )
