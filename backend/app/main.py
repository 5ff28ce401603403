"""FastAPI application wiring the price feed to the swap endpoints."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from .swap import (
    ExchangeExecutor,
    LoggingExchangeExecutor,
    PriceBook,
    SwapConfig,
    create_price_feed,
    create_swap_router,
)


def create_app(
    config: SwapConfig | None = None,
    executor: ExchangeExecutor | None = None,
) -> FastAPI:
    """Build the app. The price feed runs for the lifetime of the app."""
    config = config or SwapConfig.from_env()
    price_book = PriceBook()
    executor = executor or LoggingExchangeExecutor()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        feed = create_price_feed(price_book, config)
        await feed.start()
        app.state.price_feed = feed
        try:
            yield
        finally:
            await feed.stop()

    app = FastAPI(title="SwapDesk", lifespan=lifespan)
    app.state.price_book = price_book
    app.state.executor = executor
    app.include_router(create_swap_router(price_book, executor))
    return app
