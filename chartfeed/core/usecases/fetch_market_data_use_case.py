import logging
import math
from typing import Any, List, Optional, Sequence

from pydantic import ValidationError

from chartfeed.adapters.external.binance.binance_rest_client import BinanceRestClient
from chartfeed.config.settings import settings
from chartfeed.core.domain.entities.candle_entity import CandleEntity
from chartfeed.core.domain.entities.fetch_outcome_entity import RetriesExhausted
from chartfeed.core.domain.entities.ticker_stats_entity import TickerStatsEntity
from chartfeed.core.domain.market_catalog import is_known_interval
from chartfeed.core.services.synthetic_series_service import SyntheticSeriesGenerator


class FetchMarketDataUseCase:
    """
    Market data for the chart, with a resilient candle pipeline.

    Logic:
      - fetch_series asks the REST client for klines (timeout + retries + backoff
        live in the client) and maps each raw row to a CandleEntity.
      - Rows that are short, non-numeric or break the OHLC relationship are
        dropped individually; the rest of the batch is kept.
      - When every attempt failed (or nothing survived filtering) the synthetic
        generator produces the same number of candles for the same symbol.
        Callers always get a list; the fallback is only visible in the logs.
      - fetch_stats / fetch_current_price make one attempt and return None when
        the data is unavailable. No synthetic statistics are ever produced.
    """

    def __init__(
        self,
        binance_client: BinanceRestClient,
        generator: SyntheticSeriesGenerator,
        logger: Optional[logging.Logger] = None,
    ):
        self._binance = binance_client
        self._generator = generator
        self._logger = logger or logging.getLogger(self.__class__.__name__)

    async def fetch_series(
        self,
        symbol: Optional[str] = None,
        interval: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[CandleEntity]:
        """
        :param symbol: Trading pair, e.g. 'BTCUSDT' (case-insensitive).
        :param interval: Interval code, e.g. '1h'.
        :param limit: Number of candles wanted (at least 1). The exchange request is
            capped at 1000 by the client; the synthetic fallback honors the full limit.
        :return: Candles ordered by ascending time. Never raises.
        """
        symbol = (symbol or settings.DEFAULT_SYMBOL).upper()
        interval = interval or settings.DEFAULT_INTERVAL
        limit = max(1, int(limit or settings.DEFAULT_CANDLE_LIMIT))

        if not is_known_interval(interval):
            self._logger.warning("Unknown interval %r for %s; requesting anyway.", interval, symbol)

        self._logger.info("Fetching %s %s (%s candles)", symbol, interval, limit)

        outcome = await self._binance.get_klines(symbol=symbol, interval=interval, limit=limit)

        if isinstance(outcome, RetriesExhausted):
            self._logger.warning(
                "Klines unavailable for %s after %s attempts (%s); using synthetic series.",
                symbol,
                outcome.attempts,
                outcome.last_error,
            )
            return self._generator.generate(symbol, limit)

        candles = self.parse_klines(outcome.rows)
        if not candles:
            self._logger.warning(
                "No valid klines for %s in %s rows; using synthetic series.",
                symbol,
                len(outcome.rows),
            )
            return self._generator.generate(symbol, limit)

        self._logger.info(
            "Processed %s valid candles for %s (range %.2f - %.2f)",
            len(candles),
            symbol,
            min(c.low for c in candles),
            max(c.high for c in candles),
        )
        return candles

    def parse_klines(self, rows: Sequence[Any]) -> List[CandleEntity]:
        """
        Map raw Binance kline rows to candles, dropping invalid rows.

        Rows whose time does not advance past the last kept candle (duplicates,
        regressions) are dropped too, so the result is strictly ascending.

        Binance kline format:
          [0] openTime (ms), [1] open, [2] high, [3] low, [4] close, [5] volume, ...
        """
        candles: List[CandleEntity] = []
        for index, k in enumerate(rows):
            try:
                candle = CandleEntity(
                    time=int(k[0]) // 1000,
                    open=float(k[1]),
                    high=float(k[2]),
                    low=float(k[3]),
                    close=float(k[4]),
                    volume=float(k[5]),
                )
            except (ValidationError, ValueError, TypeError, OverflowError, IndexError, KeyError) as exc:
                self._logger.warning("Dropping invalid kline at index %s: %s", index, exc)
                continue

            if candles and candle.time <= candles[-1].time:
                self._logger.warning(
                    "Dropping out-of-order kline at index %s: time %s after %s",
                    index,
                    candle.time,
                    candles[-1].time,
                )
                continue

            candles.append(candle)
        return candles

    async def fetch_stats(self, symbol: Optional[str] = None) -> Optional[TickerStatsEntity]:
        """
        24h ticker statistics, or None when unavailable (never zero-filled).
        """
        symbol = (symbol or settings.DEFAULT_SYMBOL).upper()
        data = await self._binance.get_ticker_24hr(symbol)
        if data is None:
            return None

        try:
            return TickerStatsEntity.model_validate(data)
        except ValidationError as exc:
            self._logger.error("Invalid 24hr stats payload for %s: %s", symbol, exc)
            return None

    async def fetch_current_price(self, symbol: Optional[str] = None) -> Optional[float]:
        symbol = (symbol or settings.DEFAULT_SYMBOL).upper()
        data = await self._binance.get_ticker_price(symbol)
        if data is None:
            return None

        try:
            price = float(data["price"])
        except (KeyError, TypeError, ValueError) as exc:
            self._logger.error("Invalid ticker price payload for %s: %s", symbol, exc)
            return None

        if not math.isfinite(price):
            self._logger.error("Non-finite ticker price for %s: %s", symbol, data["price"])
            return None
        return price
