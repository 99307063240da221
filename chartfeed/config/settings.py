"""
Application configuration for chartfeed.

Centralizes environment variables using python-dotenv.
"""

import os

from dotenv import load_dotenv

# Load variables from .env (if present)
load_dotenv()


class Settings:
    """
    Configuration settings for the chartfeed service.
    """

    # Binance REST
    BINANCE_REST_BASE_URL: str = os.getenv(
        "BINANCE_REST_BASE_URL", "https://api.binance.com"
    )
    BINANCE_HTTP_TIMEOUT_SEC: float = float(
        os.getenv("BINANCE_HTTP_TIMEOUT_SEC", "10")
    )
    BINANCE_MAX_RETRIES: int = int(os.getenv("BINANCE_MAX_RETRIES", "3"))
    # Delay after failed attempt n is BASE ** n seconds (2s, 4s, ...)
    BINANCE_BACKOFF_BASE_SEC: float = float(
        os.getenv("BINANCE_BACKOFF_BASE_SEC", "2")
    )

    # Chart defaults
    DEFAULT_SYMBOL: str = os.getenv("DEFAULT_SYMBOL", "BTCUSDT")
    DEFAULT_INTERVAL: str = os.getenv("DEFAULT_INTERVAL", "1h")
    DEFAULT_CANDLE_LIMIT: int = int(os.getenv("DEFAULT_CANDLE_LIMIT", "200"))

    # Fallback generator
    SYNTHETIC_STEP_SECONDS: int = int(os.getenv("SYNTHETIC_STEP_SECONDS", "3600"))

    # Trendline persistence
    TRENDLINE_STORAGE_KEY: str = os.getenv(
        "TRENDLINE_STORAGE_KEY", "tradingChart_trendlines"
    )
    TRENDLINE_STORE_PATH: str = os.getenv(
        "TRENDLINE_STORE_PATH", "./data/chart_storage.json"
    )

    # Log / app
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    APP_NAME: str = os.getenv("APP_NAME", "chartfeed")


settings = Settings()
