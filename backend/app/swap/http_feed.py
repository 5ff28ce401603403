"""HTTP price feed polling a JSON list of price records."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx

from .interface import PriceFeedSource
from .models import PriceObservation
from .prices import PriceBook

logger = logging.getLogger(__name__)


def parse_price_records(records: Any) -> list[PriceObservation]:
    """Turn a decoded JSON payload into observations, skipping bad records.

    Expects a list of {"currency": str, "price": number, "date": ISO-8601}.
    Anything that is not a list yields no observations.
    """
    if not isinstance(records, list):
        logger.warning("Price payload is %s, expected a list", type(records).__name__)
        return []

    observations: list[PriceObservation] = []
    for record in records:
        if not isinstance(record, dict):
            logger.warning("Skipping non-object price record: %r", record)
            continue
        try:
            observations.append(PriceObservation.from_dict(record))
        except ValueError as e:
            logger.warning("Skipping price record for %s: %s", record.get("currency", "???"), e)
    return observations


class HttpPriceFeed(PriceFeedSource):
    """PriceFeedSource that polls a JSON endpoint over HTTP.

    Every poll replaces the whole observation list in the PriceBook. A failed
    poll (network error, HTTP error, bad JSON) marks the book as failed and
    keeps the last good table; the loop retries on the next interval.
    """

    def __init__(
        self,
        url: str,
        price_book: PriceBook,
        poll_interval: float = 30.0,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._url = url
        self._book = price_book
        self._interval = poll_interval
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._task: asyncio.Task | None = None

    async def start(self) -> None:
        self._client = httpx.AsyncClient(timeout=self._timeout, transport=self._transport)

        # Immediate first poll so sessions get prices right away
        await self.poll_once()

        self._task = asyncio.create_task(self._poll_loop(), name="price-poller")
        logger.info("Price poller started: %s every %.1fs", self._url, self._interval)

    async def stop(self) -> None:
        if self._task and not self._task.done():
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
        self._task = None
        if self._client is not None:
            await self._client.aclose()
            self._client = None
        logger.info("Price poller stopped")

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def poll_once(self) -> bool:
        """Fetch and publish one batch. Returns False if the poll failed."""
        if self._client is None:
            return False
        try:
            records = await self._fetch_records()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Price poll failed: %s", e)
            self._book.mark_failed(str(e) or type(e).__name__)
            return False

        observations = parse_price_records(records)
        self._book.publish(observations)
        logger.debug("Price poll: %d observations from %s", len(observations), self._url)
        return True

    async def _poll_loop(self) -> None:
        """Poll on interval. First poll already happened in start()."""
        while True:
            await asyncio.sleep(self._interval)
            try:
                await self.poll_once()
            except Exception:
                logger.exception("Unexpected error while polling prices")

    async def _fetch_records(self) -> Any:
        assert self._client is not None
        response = await self._client.get(self._url)
        response.raise_for_status()
        return response.json()
