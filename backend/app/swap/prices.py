"""Latest-price resolution and the shared price book."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator, Mapping
from threading import Lock

from .models import PriceObservation

logger = logging.getLogger(__name__)

PriceListener = Callable[["PriceTable"], None]


class PriceTable(Mapping[str, float]):
    """Immutable mapping of asset -> latest resolved price.

    Iteration order is the order in which each asset was first observed,
    which is also the order used to pick default asset selections.
    """

    __slots__ = ("_prices",)

    def __init__(self, prices: Mapping[str, float] | None = None) -> None:
        self._prices: dict[str, float] = dict(prices or {})

    def __getitem__(self, asset: str) -> float:
        return self._prices[asset]

    def __iter__(self) -> Iterator[str]:
        return iter(self._prices)

    def __len__(self) -> int:
        return len(self._prices)

    def __repr__(self) -> str:
        return f"PriceTable({self._prices!r})"

    @property
    def assets(self) -> list[str]:
        """Distinct assets in first-seen order."""
        return list(self._prices)

    def get_price(self, asset: str | None) -> float | None:
        """Price for an asset, or None if it has no observations."""
        if not asset:
            return None
        return self._prices.get(asset)

    def to_dict(self) -> dict[str, float]:
        return dict(self._prices)


def resolve(observations: Iterable[PriceObservation]) -> PriceTable:
    """Reduce raw observations to one price per asset.

    The observation with the greatest ``observed_at`` wins. On a tie the one
    seen first is kept, so the result does not depend on anything but input order.
    """
    latest: dict[str, PriceObservation] = {}
    for obs in observations:
        kept = latest.get(obs.asset)
        if kept is None or obs.observed_at > kept.observed_at:
            latest[obs.asset] = obs
    return PriceTable({asset: obs.price for asset, obs in latest.items()})


class PriceBook:
    """Thread-safe holder of the current PriceTable.

    Writers: HttpPriceFeed or SimulatedPriceFeed (one at a time).
    Readers: swap sessions (via listeners), the HTTP API and the SSE stream.
    """

    def __init__(self) -> None:
        self._table = PriceTable()
        self._error: str | None = None
        self._listeners: list[PriceListener] = []
        self._lock = Lock()
        self._version: int = 0  # Bumped on every publish

    def publish(self, observations: Iterable[PriceObservation]) -> PriceTable:
        """Resolve a fresh observation list and make it the current table."""
        table = resolve(observations)
        with self._lock:
            self._table = table
            self._error = None
            self._version += 1
            listeners = list(self._listeners)
        logger.debug("Published price table v%d with %d assets", self._version, len(table))

        for listener in listeners:
            try:
                listener(table)
            except Exception:
                logger.exception("Price listener %r failed", listener)
        return table

    def mark_failed(self, message: str) -> None:
        """Record a feed failure. The last good table stays in place."""
        with self._lock:
            self._error = message

    def add_listener(self, listener: PriceListener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def remove_listener(self, listener: PriceListener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    @property
    def table(self) -> PriceTable:
        with self._lock:
            return self._table

    @property
    def error(self) -> str | None:
        with self._lock:
            return self._error

    @property
    def version(self) -> int:
        """Current version counter. Useful for SSE change detection."""
        return self._version

    @property
    def available(self) -> bool:
        """True once at least one asset has a price."""
        return len(self.table) > 0
