# core/domain/entities/ticker_stats_entity.py
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class TickerStatsEntity(BaseModel):
    """
    24h rolling ticker snapshot from GET /api/v3/ticker/24hr.

    Binance sends camelCase keys with numbers encoded as strings; pydantic's lax
    mode coerces them to floats. Requested per call, never cached.
    """

    symbol: str
    price_change: float
    price_change_percent: float
    last_price: float
    high_price: float
    low_price: float
    open_price: float
    volume: float

    weighted_avg_price: Optional[float] = None
    prev_close_price: Optional[float] = None
    bid_price: Optional[float] = None
    ask_price: Optional[float] = None
    quote_volume: Optional[float] = None
    open_time: Optional[int] = None
    close_time: Optional[int] = None
    count: Optional[int] = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )
