"""Seed prices and per-asset parameters for the offline price simulator."""

# USD starting prices, roughly where the public feed sat when this was written
SEED_PRICES: dict[str, float] = {
    "BTC": 26000.00,
    "ETH": 1645.93,
    "wstETH": 1872.00,
    "ATOM": 7.19,
    "OSMO": 0.377,
    "LUNA": 0.409,
    "KUJI": 0.675,
    "GMX": 36.35,
    "BLUR": 0.208,
    "SWTH": 0.00405,
    "ZIL": 0.0165,
    "USDC": 1.00,
    "USDT": 1.00,
    "BUSD": 0.9998,
}

# Pegged assets barely move and never get shocked
STABLECOINS: frozenset[str] = frozenset({"USDC", "USDT", "BUSD"})

# sigma: annualized volatility, mu: annualized drift
ASSET_PARAMS: dict[str, dict[str, float]] = {
    "BTC": {"sigma": 0.55, "mu": 0.10},
    "ETH": {"sigma": 0.70, "mu": 0.10},
    "wstETH": {"sigma": 0.70, "mu": 0.12},
    "ATOM": {"sigma": 0.90, "mu": 0.05},
    "OSMO": {"sigma": 1.00, "mu": 0.05},
    "LUNA": {"sigma": 1.20, "mu": 0.00},
    "KUJI": {"sigma": 1.10, "mu": 0.05},
    "GMX": {"sigma": 0.85, "mu": 0.05},
    "BLUR": {"sigma": 1.10, "mu": 0.00},
    "SWTH": {"sigma": 1.20, "mu": 0.00},
    "ZIL": {"sigma": 1.00, "mu": 0.00},
    "USDC": {"sigma": 0.002, "mu": 0.0},
    "USDT": {"sigma": 0.002, "mu": 0.0},
    "BUSD": {"sigma": 0.002, "mu": 0.0},
}

# For assets added at runtime that have no entry above
DEFAULT_PARAMS: dict[str, float] = {"sigma": 0.80, "mu": 0.05}
