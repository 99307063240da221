import logging
import random
from contextlib import asynccontextmanager

from fastapi import FastAPI

from chartfeed.adapters.entry.http.market_router import router as market_router
from chartfeed.adapters.entry.http.trendline_router import router as trendline_router
from chartfeed.adapters.external.binance.binance_rest_client import BinanceRestClient
from chartfeed.adapters.external.storage.json_file_key_value_store import JsonFileKeyValueStore
from chartfeed.config.settings import settings
from chartfeed.core.services.synthetic_series_service import SyntheticSeriesGenerator
from chartfeed.core.services.trendline_store_service import TrendlineStore
from chartfeed.core.usecases.fetch_market_data_use_case import FetchMarketDataUseCase


def _setup_logging() -> None:
    log_level = settings.LOG_LEVEL.upper()
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    _setup_logging()
    logger = logging.getLogger(__name__)
    logger.info("Starting %s (lifespan startup)...", settings.APP_NAME)

    binance_client = BinanceRestClient()
    generator = SyntheticSeriesGenerator(
        rng=random.Random(),
        step_seconds=settings.SYNTHETIC_STEP_SECONDS,
    )

    app.state.binance_client = binance_client
    app.state.market_data = FetchMarketDataUseCase(
        binance_client=binance_client,
        generator=generator,
    )
    app.state.trendline_store = TrendlineStore(
        store=JsonFileKeyValueStore(settings.TRENDLINE_STORE_PATH),
        storage_key=settings.TRENDLINE_STORAGE_KEY,
    )
    logger.info("Trendlines persisted at %s", settings.TRENDLINE_STORE_PATH)

    try:
        yield
    finally:
        logger.info("Shutting down %s (lifespan shutdown)...", settings.APP_NAME)
        await binance_client.aclose()
        logger.info("Binance client closed.")


app = FastAPI(title=settings.APP_NAME, version="0.1.0", lifespan=lifespan)

app.include_router(market_router)
app.include_router(trendline_router)


@app.get("/healthz")
async def healthz():
    return {"status": "ok"}
