# core/domain/market_catalog.py
"""
Static market reference data: interval codes, the trading-pair catalog and the
per-symbol profiles used by the synthetic generator and the price formatter.

Everything here is read-only; lookups are pure functions with an explicit
default branch for unknown keys.
"""

from typing import Dict, List, NamedTuple


class IntervalSpec(NamedTuple):
    seconds: int
    label: str


class SymbolProfile(NamedTuple):
    base_price: float
    volatility: float
    base_volume: float
    price_precision: int


DEFAULT_INTERVAL_SECONDS = 3600

INTERVALS: Dict[str, IntervalSpec] = {
    "1m": IntervalSpec(60, "1 Minute"),
    "3m": IntervalSpec(180, "3 Minutes"),
    "5m": IntervalSpec(300, "5 Minutes"),
    "15m": IntervalSpec(900, "15 Minutes"),
    "30m": IntervalSpec(1_800, "30 Minutes"),
    "1h": IntervalSpec(3_600, "1 Hour"),
    "2h": IntervalSpec(7_200, "2 Hours"),
    "4h": IntervalSpec(14_400, "4 Hours"),
    "6h": IntervalSpec(21_600, "6 Hours"),
    "8h": IntervalSpec(28_800, "8 Hours"),
    "12h": IntervalSpec(43_200, "12 Hours"),
    "1d": IntervalSpec(86_400, "1 Day"),
    "3d": IntervalSpec(259_200, "3 Days"),
    "1w": IntervalSpec(604_800, "1 Week"),
    "1M": IntervalSpec(2_592_000, "1 Month"),
}

# Not validated against the live exchange; only feeds the symbol selector.
TRADING_PAIRS: Dict[str, str] = {
    "BTCUSDT": "Bitcoin",
    "ETHUSDT": "Ethereum",
    "BNBUSDT": "BNB",
    "ADAUSDT": "Cardano",
    "SOLUSDT": "Solana",
    "XRPUSDT": "XRP",
    "DOTUSDT": "Polkadot",
    "DOGEUSDT": "Dogecoin",
    "AVAXUSDT": "Avalanche",
    "MATICUSDT": "Polygon",
    "LINKUSDT": "Chainlink",
    "UNIUSDT": "Uniswap",
    "LTCUSDT": "Litecoin",
    "BCHUSDT": "Bitcoin Cash",
    "FILUSDT": "Filecoin",
}

DEFAULT_PROFILE = SymbolProfile(
    base_price=100.0, volatility=0.05, base_volume=1_000_000.0, price_precision=2
)

_PROFILES: Dict[str, SymbolProfile] = {
    "BTCUSDT": SymbolProfile(43_000.0, 0.03, 1_000_000.0, 2),
    "ETHUSDT": SymbolProfile(2_300.0, 0.04, 500_000.0, 2),
    "BNBUSDT": SymbolProfile(310.0, 0.05, 200_000.0, 2),
    "ADAUSDT": SymbolProfile(0.38, 0.06, 10_000_000.0, 6),
    "SOLUSDT": SymbolProfile(98.0, 0.07, 300_000.0, 2),
    "XRPUSDT": SymbolProfile(0.52, 0.05, 50_000_000.0, 6),
    "DOTUSDT": SymbolProfile(5.8, 0.06, 1_000_000.0, 2),
    "DOGEUSDT": SymbolProfile(0.08, 0.08, 100_000_000.0, 6),
    "AVAXUSDT": SymbolProfile(24.0, 0.07, 500_000.0, 2),
    "MATICUSDT": SymbolProfile(0.73, 0.06, 5_000_000.0, 6),
}


def get_symbol_profile(symbol: str) -> SymbolProfile:
    """Profile for a trading pair, or DEFAULT_PROFILE when the pair is unknown."""
    return _PROFILES.get((symbol or "").upper(), DEFAULT_PROFILE)


def get_price_precision(symbol: str) -> int:
    return get_symbol_profile(symbol).price_precision


def get_interval_seconds(interval: str) -> int:
    entry = INTERVALS.get(interval)
    if entry is None:
        return DEFAULT_INTERVAL_SECONDS
    return entry.seconds


def is_known_interval(interval: str) -> bool:
    return interval in INTERVALS


def list_trading_pairs() -> List[Dict[str, str]]:
    return [{"symbol": s, "name": n} for s, n in TRADING_PAIRS.items()]
