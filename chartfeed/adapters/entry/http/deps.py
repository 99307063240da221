from fastapi import Request

from chartfeed.core.services.trendline_store_service import TrendlineStore
from chartfeed.core.usecases.fetch_market_data_use_case import FetchMarketDataUseCase


def get_market_data(request: Request) -> FetchMarketDataUseCase:
    uc = getattr(request.app.state, "market_data", None)
    if uc is None:
        raise RuntimeError("Market data use case not initialized. Check app lifespan startup.")
    return uc


def get_trendline_store(request: Request) -> TrendlineStore:
    store = getattr(request.app.state, "trendline_store", None)
    if store is None:
        raise RuntimeError("Trendline store not initialized. Check app lifespan startup.")
    return store
