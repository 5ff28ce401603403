"""Abstract interfaces for the swap subsystem's collaborators."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .models import ExchangeSummary


class PriceFeedSource(ABC):
    """Contract for price providers.

    Implementations publish observation lists into a shared PriceBook on their
    own schedule. Sessions and the API never call the feed for prices, they
    read the book.

    Lifecycle:
        feed = create_price_feed(book, config)
        await feed.start()
        # ... app runs ...
        await feed.stop()
    """

    @abstractmethod
    async def start(self) -> None:
        """Begin publishing prices.

        Starts a background task that periodically writes to the PriceBook.
        Must be called exactly once.
        """

    @abstractmethod
    async def stop(self) -> None:
        """Stop the background task. Safe to call multiple times."""

    @property
    @abstractmethod
    def is_running(self) -> bool:
        """True while the background task is alive."""


class ExchangeExecutor(ABC):
    """Receives one ExchangeSummary per confirmed swap.

    What happens next (an on-chain transaction, a ledger entry) is up to the
    implementation.
    """

    @abstractmethod
    def execute(self, summary: ExchangeSummary) -> None:
        """Take ownership of a confirmed swap."""
