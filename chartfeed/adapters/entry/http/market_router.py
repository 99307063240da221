from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, Query

from chartfeed.config.settings import settings
from chartfeed.core.domain.entities.candle_entity import CandleEntity
from chartfeed.core.domain.entities.ticker_stats_entity import TickerStatsEntity
from chartfeed.core.domain.market_catalog import INTERVALS, is_known_interval, list_trading_pairs
from chartfeed.core.usecases.fetch_market_data_use_case import FetchMarketDataUseCase

from .deps import get_market_data

router = APIRouter(prefix="/market", tags=["market"])


@router.get("/intervals")
async def list_intervals() -> Dict[str, Dict[str, Any]]:
    return {code: {"label": entry.label, "seconds": entry.seconds} for code, entry in INTERVALS.items()}


@router.get("/pairs")
async def list_pairs() -> List[Dict[str, str]]:
    return list_trading_pairs()


@router.get("/candles", response_model=List[CandleEntity])
async def get_candles(
    symbol: str = Query(settings.DEFAULT_SYMBOL, min_length=1),
    interval: str = Query(settings.DEFAULT_INTERVAL),
    limit: int = Query(settings.DEFAULT_CANDLE_LIMIT, ge=1, le=1000),
    uc: FetchMarketDataUseCase = Depends(get_market_data),
) -> List[CandleEntity]:
    if not is_known_interval(interval):
        raise HTTPException(status_code=422, detail=f"Unknown interval: {interval}")
    return await uc.fetch_series(symbol=symbol, interval=interval, limit=limit)


@router.get("/stats/{symbol}", response_model=TickerStatsEntity)
async def get_stats(
    symbol: str,
    uc: FetchMarketDataUseCase = Depends(get_market_data),
) -> TickerStatsEntity:
    stats = await uc.fetch_stats(symbol)
    if stats is None:
        raise HTTPException(status_code=503, detail=f"24hr stats unavailable for {symbol.upper()}")
    return stats


@router.get("/price/{symbol}")
async def get_price(
    symbol: str,
    uc: FetchMarketDataUseCase = Depends(get_market_data),
) -> Dict[str, Any]:
    price = await uc.fetch_current_price(symbol)
    if price is None:
        raise HTTPException(status_code=503, detail=f"Price unavailable for {symbol.upper()}")
    return {"symbol": symbol.upper(), "price": price}
