import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Optional

import httpx

from chartfeed.config.settings import settings
from chartfeed.core.domain.entities.fetch_outcome_entity import (
    FetchOutcome,
    RetriesExhausted,
    SeriesFetched,
)

SleepFn = Callable[[float], Awaitable[None]]


class BinanceRestClient:
    """
    Minimal async REST client for Binance public market data.

    Currently supports:
      - GET /api/v3/klines        (chart candles, retried)
      - GET /api/v3/ticker/24hr   (24h stats, single attempt)
      - GET /api/v3/ticker/price  (last price, single attempt)

    Design:
      - Uses a shared httpx.AsyncClient (injectable, e.g. with a MockTransport).
      - Every request is bounded by a total timeout; a timed-out request is a
        failed attempt, not an error.
      - klines retries with exponential backoff: after failed attempt n it
        sleeps backoff_base ** n seconds (2s, 4s, ...).
      - Does NOT require API key for public endpoints.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        backoff_base: float | None = None,
        http_client: httpx.AsyncClient | None = None,
        sleep: SleepFn = asyncio.sleep,
    ) -> None:
        """
        :param base_url: Binance REST base URL (default from settings).
        :param timeout: Per-request timeout in seconds.
        :param max_retries: Number of klines attempts before giving up.
        :param backoff_base: Base of the exponential delay between attempts.
        :param http_client: Pre-built AsyncClient; one is created when omitted.
        :param sleep: Coroutine used for backoff delays.
        """
        self._logger = logging.getLogger(self.__class__.__name__)
        self._base_url = (base_url or settings.BINANCE_REST_BASE_URL).rstrip("/")
        self._timeout = float(timeout if timeout is not None else settings.BINANCE_HTTP_TIMEOUT_SEC)
        self._max_retries = max(1, int(max_retries if max_retries is not None else settings.BINANCE_MAX_RETRIES))
        self._backoff_base = float(
            backoff_base if backoff_base is not None else settings.BINANCE_BACKOFF_BASE_SEC
        )
        self._sleep = sleep

        self._client = http_client or httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
        )

    @property
    def max_retries(self) -> int:
        return self._max_retries

    async def aclose(self) -> None:
        """
        Close the underlying HTTP client.
        """
        try:
            await self._client.aclose()
        except Exception as exc:  # noqa: BLE001
            self._logger.warning("Error closing BinanceRestClient: %s", exc)

    def _url(self, path: str) -> str:
        return f"{self._base_url}{path}"

    async def _get_json(self, path: str, params: Dict[str, Any]) -> Any:
        resp = await asyncio.wait_for(
            self._client.get(self._url(path), params=params),
            timeout=self._timeout,
        )
        resp.raise_for_status()
        return resp.json()

    async def get_klines(self, symbol: str, interval: str, limit: int = 200) -> FetchOutcome:
        """
        Fetch klines (candlestick data) from Binance.

        Wrapper for GET /api/v3/klines:
          - https://api.binance.com/api/v3/klines

        A non-2xx status, transport error, timeout, non-JSON body or a body that
        is not a non-empty list is a failed attempt.

        :param symbol: Trading pair, e.g. 'ETHUSDT' (case-insensitive).
        :param interval: Interval string, e.g. '1h'.
        :param limit: Max number of klines [1, 1000].
        :return: SeriesFetched with the raw rows, or RetriesExhausted.
        """
        symbol = symbol.upper()
        limit = max(1, min(int(limit), 1000))

        params: Dict[str, Any] = {
            "symbol": symbol,
            "interval": interval,
            "limit": limit,
        }
        path = "/api/v3/klines"
        last_error: Optional[str] = None

        for attempt in range(1, self._max_retries + 1):
            try:
                data = await self._get_json(path, params)

                # Binance returns a list of lists; row parsing happens upstream.
                if isinstance(data, list) and data:
                    self._logger.info(
                        "Received %s klines for %s %s (attempt %s/%s)",
                        len(data),
                        symbol,
                        interval,
                        attempt,
                        self._max_retries,
                    )
                    return SeriesFetched(rows=data, attempts=attempt)

                last_error = f"invalid or empty klines body ({type(data).__name__})"
                self._logger.warning(
                    "Unexpected klines response for %s (attempt %s/%s): %s",
                    symbol,
                    attempt,
                    self._max_retries,
                    last_error,
                )

            except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
                last_error = f"timeout after {self._timeout}s"
                self._logger.warning(
                    "Binance klines timeout (attempt %s/%s) for %s: %r",
                    attempt,
                    self._max_retries,
                    symbol,
                    exc,
                )
            except httpx.HTTPStatusError as exc:
                status = exc.response.status_code
                last_error = f"HTTP {status}"
                self._logger.warning(
                    "Binance klines HTTP %s (attempt %s/%s) for %s: %s",
                    status,
                    attempt,
                    self._max_retries,
                    symbol,
                    exc,
                )
            except Exception as exc:  # noqa: BLE001
                last_error = str(exc) or exc.__class__.__name__
                self._logger.warning(
                    "Binance klines unexpected error (attempt %s/%s) for %s: %s",
                    attempt,
                    self._max_retries,
                    symbol,
                    exc,
                )

            if attempt == self._max_retries:
                break

            await self.backoff(attempt)

        self._logger.error(
            "Failed to fetch klines for %s after %s attempts.",
            symbol,
            self._max_retries,
        )
        return RetriesExhausted(attempts=self._max_retries, last_error=last_error)

    async def backoff(self, attempt: int) -> None:
        delay = self._backoff_base ** attempt
        self._logger.info("Retrying in %ss", delay)
        await self._sleep(delay)

    async def get_ticker_24hr(self, symbol: str) -> Optional[Dict[str, Any]]:
        """
        Fetch the 24h rolling ticker for one symbol. Single attempt.

        :return: Raw JSON object, or None if unavailable.
        """
        symbol = symbol.upper()
        try:
            data = await self._get_json("/api/v3/ticker/24hr", {"symbol": symbol})
        except Exception as exc:  # noqa: BLE001
            self._logger.error("Error fetching 24hr stats for %s: %r", symbol, exc)
            return None

        if not isinstance(data, dict):
            self._logger.warning("Unexpected 24hr ticker format for %s: %s", symbol, type(data))
            return None
        return data

    async def get_ticker_price(self, symbol: str) -> Optional[Dict[str, Any]]:
        """
        Fetch the last traded price for one symbol. Single attempt.

        :return: Raw JSON object ({"symbol", "price"}), or None if unavailable.
        """
        symbol = symbol.upper()
        try:
            data = await self._get_json("/api/v3/ticker/price", {"symbol": symbol})
        except Exception as exc:  # noqa: BLE001
            self._logger.error("Error fetching current price for %s: %r", symbol, exc)
            return None

        if not isinstance(data, dict):
            self._logger.warning("Unexpected ticker price format for %s: %s", symbol, type(data))
            return None
        return data
