"""Default exchange executor."""

from __future__ import annotations

import logging

from .interface import ExchangeExecutor
from .models import ExchangeSummary

logger = logging.getLogger(__name__)


class LoggingExchangeExecutor(ExchangeExecutor):
    """Logs each confirmed swap and remembers the most recent one."""

    def __init__(self) -> None:
        self.last_summary: ExchangeSummary | None = None
        self.count = 0

    def execute(self, summary: ExchangeSummary) -> None:
        self.last_summary = summary
        self.count += 1
        logger.info(
            "Executing exchange #%d: %.8g %s (~$%.2f) -> %.8g %s (~$%.2f)",
            self.count,
            summary.send_amount,
            summary.send_asset,
            summary.approx_usd_send_amount,
            summary.receive_amount,
            summary.receive_asset,
            summary.approx_usd_receive_amount,
        )
