"""Swap subsystem for SwapDesk.

Public API:
    PriceObservation    - Immutable timestamped price sample
    PriceTable          - Latest price per asset (built by ``resolve``)
    PriceBook           - Thread-safe holder of the current PriceTable
    received_from_send  - Receive amount for a given send amount
    send_from_received  - Send amount needed for a given receive amount
    SwapSession         - Keeps the send and receive amounts in sync
    is_valid            - Submit gate for a swap
    build_summary       - ExchangeSummary for a confirmed swap
    create_price_feed   - Factory that selects the HTTP feed or simulator
    create_swap_router  - FastAPI router factory for the swap endpoints
"""

from .api import create_swap_router
from .config import SwapConfig
from .conversion import parse_amount, received_from_send, send_from_received
from .executor import LoggingExchangeExecutor
from .factory import create_price_feed
from .interface import ExchangeExecutor, PriceFeedSource
from .models import ExchangeSummary, PriceObservation, SwapState
from .prices import PriceBook, PriceTable, resolve
from .session import SwapSession
from .summary import approx_usd, build_summary
from .validity import is_valid

__all__ = [
    "ExchangeExecutor",
    "ExchangeSummary",
    "LoggingExchangeExecutor",
    "PriceBook",
    "PriceFeedSource",
    "PriceObservation",
    "PriceTable",
    "SwapConfig",
    "SwapSession",
    "SwapState",
    "approx_usd",
    "build_summary",
    "create_price_feed",
    "create_swap_router",
    "is_valid",
    "parse_amount",
    "received_from_send",
    "resolve",
    "send_from_received",
]
