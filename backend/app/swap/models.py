"""Data models for the swap subsystem."""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Literal

Side = Literal["send", "receive"]


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def parse_timestamp(raw: str | float | int) -> float:
    """Parse an ISO-8601 string (or Unix seconds) into Unix seconds.

    Naive datetimes are treated as UTC. Raises ValueError on garbage.
    """
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        return float(raw)
    if not isinstance(raw, str):
        raise ValueError(f"Unsupported timestamp: {raw!r}")
    text = raw.strip()
    # fromisoformat() only learned about "Z" in 3.11
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    dt = datetime.fromisoformat(text)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.timestamp()


@dataclass(frozen=True, slots=True)
class PriceObservation:
    """Immutable price sample for one asset at a point in time."""

    asset: str
    price: float
    observed_at: float  # Unix seconds

    @classmethod
    def from_dict(cls, record: dict[str, Any]) -> PriceObservation:
        """Build from a feed record shaped like {"currency", "price", "date"}."""
        try:
            asset = record["currency"]
            price = float(record["price"])
            observed_at = parse_timestamp(record["date"])
        except (KeyError, TypeError) as e:
            raise ValueError(f"Malformed price record {record!r}: {e}") from e

        if not isinstance(asset, str) or not asset.strip():
            raise ValueError(f"Missing currency in price record {record!r}")
        if not math.isfinite(price):
            raise ValueError(f"Non-finite price in record {record!r}")
        return cls(asset=asset.strip(), price=price, observed_at=observed_at)


@dataclass(frozen=True, slots=True)
class SwapState:
    """Point-in-time copy of the fields a swap session edits."""

    send_amount: float | None = None
    receive_amount: float | None = None
    send_asset: str | None = None
    receive_asset: str | None = None
    last_edited: Side | None = None


@dataclass(frozen=True, slots=True)
class ExchangeSummary:
    """What gets handed to the exchange executor once a swap is confirmed."""

    send_amount: float
    receive_amount: float
    approx_usd_send_amount: float
    approx_usd_receive_amount: float
    send_asset: str
    receive_asset: str
    timestamp: str = field(default_factory=_utc_now_iso)

    def to_dict(self) -> dict:
        """Serialize for JSON responses."""
        return asdict(self)
