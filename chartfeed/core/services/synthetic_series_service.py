import logging
import random
import time
from typing import List, Optional

from chartfeed.core.domain.entities.candle_entity import CandleEntity
from chartfeed.core.domain.market_catalog import get_symbol_profile

# Floor for close/low, as a fraction of the running price.
PRICE_FLOOR_RATIO = 0.01
# Wick size relative to volatility * running price.
WICK_RATIO = 0.3


class SyntheticSeriesGenerator:
    """
    Builds a plausible OHLCV series for a symbol when real data is unavailable.

    Shape is deterministic (exactly `limit` candles, one per `step_seconds`,
    ending at `now`); values are a random walk seeded from the symbol profile.
    Pass a seeded `random.Random` to make output reproducible.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        step_seconds: int = 3600,
        logger: Optional[logging.Logger] = None,
    ):
        self._rng = rng or random.Random()
        self._step = int(step_seconds)
        self._logger = logger or logging.getLogger(self.__class__.__name__)

    def generate(self, symbol: str, limit: int, now: Optional[int] = None) -> List[CandleEntity]:
        """
        :param symbol: Trading pair, e.g. 'BTCUSDT'. Unknown pairs use the default profile.
        :param limit: Number of candles to produce.
        :param now: Epoch seconds of the newest candle (defaults to the current time).
        :return: Candles ordered by ascending time.
        """
        if limit <= 0:
            return []

        profile = get_symbol_profile(symbol)
        precision = profile.price_precision
        vol = profile.volatility
        end_time = int(time.time()) if now is None else int(now)

        self._logger.info("Generating %s synthetic candles for %s", limit, symbol)

        candles: List[CandleEntity] = []
        current = profile.base_price

        for i in range(limit - 1, -1, -1):
            open_ = current
            change = self._rng.uniform(-0.5, 0.5) * vol * current
            close = max(open_ + change, current * PRICE_FLOOR_RATIO)

            wick_up = self._rng.random() * vol * current * WICK_RATIO
            wick_down = self._rng.random() * vol * current * WICK_RATIO
            high = max(open_, close) + wick_up
            low = max(min(open_, close) - wick_down, current * PRICE_FLOOR_RATIO)

            volume = profile.base_volume * self._rng.uniform(0.5, 1.5)

            candles.append(
                CandleEntity(
                    time=end_time - i * self._step,
                    open=_round_price(open_, precision),
                    high=_round_price(high, precision),
                    low=_round_price(low, precision),
                    close=_round_price(close, precision),
                    volume=round(volume, 2),
                )
            )
            current = close

        return candles


def _round_price(value: float, precision: int) -> float:
    # Never round a price down to zero; monotone, so OHLC ordering survives.
    return max(round(value, precision), 10 ** -precision)
