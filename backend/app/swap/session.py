"""Stateful coordinator keeping the send and receive amounts in sync."""

from __future__ import annotations

import logging

from .config import DEFAULT_DEBOUNCE_DELAY
from .conversion import Amount, received_from_send, send_from_received
from .debounce import Debouncer
from .interface import ExchangeExecutor
from .models import ExchangeSummary, Side, SwapState
from .prices import PriceTable
from .summary import build_summary
from .validity import is_valid

logger = logging.getLogger(__name__)


class SwapSession:
    """One user's swap form: two amounts, two assets, and who typed last.

    Event rules:
      - Editing an amount recomputes only the *other* amount, after a quiet
        period, using whatever the fields hold when the timer fires.
      - Changing either asset rederives the receive amount from the send
        amount right away. Send stays authoritative for asset changes even
        if the last amount edit was on the receive side.
      - A price refresh never overwrites the amount the user last typed.
      - Missing prices and non-finite results never raise; the derived field
        just keeps its last value.

    All mutation happens on one event loop. dispose() (or leaving the async
    context) cancels pending timers; a timer that still fires is ignored.
    """

    def __init__(
        self,
        debounce_delay: float = DEFAULT_DEBOUNCE_DELAY,
        price_table: PriceTable | None = None,
    ) -> None:
        self.send_amount: Amount = None
        self.receive_amount: Amount = None
        self.send_asset: str | None = None
        self.receive_asset: str | None = None
        self.last_edited: Side | None = None

        self._table = PriceTable()
        self._disposed = False
        self._send_timer = Debouncer(debounce_delay, name="swap-recompute-receive")
        self._receive_timer = Debouncer(debounce_delay, name="swap-recompute-send")

        if price_table is not None:
            self.apply_prices(price_table)

    # --- Events ---

    def apply_prices(self, table: PriceTable) -> None:
        """A new price table arrived: seed default assets and rederive the derived side.

        Receive is rederived from send unless the user last typed into the
        receive field. In that case receive stays as typed, and send follows
        it (at once, or when the pending receive timer fires).
        """
        if self._disposed:
            return
        self._table = table
        assets = table.assets
        if not assets:
            return

        if not self.send_asset:
            self.send_asset = assets[0]
        if not self.receive_asset:
            self.receive_asset = assets[1] if len(assets) > 1 else assets[0]

        if self.last_edited == "receive":
            if not self._receive_timer.pending:
                self._derive_send()
        elif self.send_amount is not None:
            self._derive_receive()

    def edit_send_amount(self, value: Amount) -> None:
        if self._disposed:
            return
        self._send_timer.require_loop()
        self.last_edited = "send"
        self.send_amount = value
        self._receive_timer.cancel()
        self._send_timer.schedule(self._on_send_settled)

    def edit_receive_amount(self, value: Amount) -> None:
        if self._disposed:
            return
        self._receive_timer.require_loop()
        self.last_edited = "receive"
        self.receive_amount = value
        self._send_timer.cancel()
        self._receive_timer.schedule(self._on_receive_settled)

    def change_send_asset(self, asset: str | None) -> None:
        if self._disposed:
            return
        self.send_asset = asset
        self._derive_receive()

    def change_receive_asset(self, asset: str | None) -> None:
        if self._disposed:
            return
        self.receive_asset = asset
        self._derive_receive()

    # --- Submission ---

    @property
    def is_valid(self) -> bool:
        return is_valid(self.snapshot())

    def submit(self, executor: ExchangeExecutor) -> ExchangeSummary | None:
        """Hand a summary to ``executor`` if the swap is valid, then clear amounts.

        Returns the summary, or None when the swap was not valid.
        """
        if self._disposed:
            return None
        state = self.snapshot()
        if not is_valid(state):
            logger.debug("Ignoring submit of invalid swap %s", state)
            return None

        summary = build_summary(state, self._table)
        executor.execute(summary)
        logger.info(
            "Exchange submitted: %s %s -> %s %s",
            summary.send_amount,
            summary.send_asset,
            summary.receive_amount,
            summary.receive_asset,
        )
        self.reset()
        return summary

    def reset(self) -> None:
        """Back to empty amounts. Asset selections are kept."""
        self._send_timer.cancel()
        self._receive_timer.cancel()
        self.send_amount = None
        self.receive_amount = None
        self.last_edited = None

    # --- Lifecycle ---

    def snapshot(self) -> SwapState:
        return SwapState(
            send_amount=self.send_amount,
            receive_amount=self.receive_amount,
            send_asset=self.send_asset,
            receive_asset=self.receive_asset,
            last_edited=self.last_edited,
        )

    @property
    def price_table(self) -> PriceTable:
        return self._table

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        """Cancel pending recomputations. Safe to call multiple times."""
        self._disposed = True
        self._send_timer.cancel()
        self._receive_timer.cancel()

    async def aclose(self) -> None:
        self._disposed = True
        await self._send_timer.aclose()
        await self._receive_timer.aclose()

    async def __aenter__(self) -> SwapSession:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # --- Internals ---

    def _on_send_settled(self) -> None:
        if not self._disposed:
            self._derive_receive()

    def _on_receive_settled(self) -> None:
        if not self._disposed:
            self._derive_send()

    def _derive_send(self) -> None:
        result = send_from_received(
            self.receive_amount, self.send_asset, self.receive_asset, self._table
        )
        if result is not None:
            self.send_amount = result

    def _derive_receive(self) -> None:
        result = received_from_send(
            self.send_amount, self.send_asset, self.receive_asset, self._table
        )
        if result is not None:
            self.receive_amount = result
