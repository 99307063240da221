# core/domain/entities/fetch_outcome_entity.py
"""
Tagged result of a klines retrieval.

The REST client never raises for transient failures; it reports either the
parsed rows or the fact that every attempt failed. The use case collapses the
latter into a synthetic series, so callers only ever see a list of candles.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional, Union


@dataclass(frozen=True)
class SeriesFetched:
    rows: List[List[Any]] = field(default_factory=list)
    attempts: int = 1


@dataclass(frozen=True)
class RetriesExhausted:
    attempts: int
    last_error: Optional[str] = None


FetchOutcome = Union[SeriesFetched, RetriesExhausted]
