from datetime import datetime, tzinfo
from typing import Optional

from chartfeed.config.settings import settings
from chartfeed.core.domain.market_catalog import get_price_precision

_VOLUME_UNITS = (
    (1_000_000_000, "B"),
    (1_000_000, "M"),
    (1_000, "K"),
)


def format_price(price: float, symbol: Optional[str] = None) -> str:
    precision = get_price_precision(symbol or settings.DEFAULT_SYMBOL)
    return f"{float(price):.{precision}f}"


def format_volume(volume: float) -> str:
    """1_500_000 -> '1.50M', 999 -> '999.00'."""
    for threshold, suffix in _VOLUME_UNITS:
        if volume >= threshold:
            return f"{volume / threshold:.2f}{suffix}"
    return f"{volume:.2f}"


def format_percentage(percentage: float) -> str:
    sign = "+" if percentage >= 0 else ""
    return f"{sign}{percentage:.2f}%"


def format_timestamp(timestamp: int, tz: Optional[tzinfo] = None) -> str:
    """Epoch seconds -> 'YYYY-MM-DD HH:MM:SS' (local time unless tz is given)."""
    return datetime.fromtimestamp(timestamp, tz=tz).strftime("%Y-%m-%d %H:%M:%S")
