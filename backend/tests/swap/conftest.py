"""Fixtures for swap tests."""

import pytest

from app.swap.models import PriceObservation
from app.swap.prices import PriceTable, resolve

T0 = 1_693_292_640.0  # 2023-08-29T07:04:00Z


@pytest.fixture
def observations() -> list[PriceObservation]:
    return [
        PriceObservation(asset="BTC", price=50000.0, observed_at=T0),
        PriceObservation(asset="ETH", price=3000.0, observed_at=T0),
        PriceObservation(asset="USDC", price=1.0, observed_at=T0),
    ]


@pytest.fixture
def table(observations) -> PriceTable:
    return resolve(observations)
