import json
import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from pydantic import ValidationError

from chartfeed.config.settings import settings
from chartfeed.core.domain.entities.trendline_entity import TRANSIENT_FIELDS, TrendlineEntity
from chartfeed.core.repositories.key_value_store import KeyValueStore

TrendlineLike = Union[TrendlineEntity, Mapping[str, Any]]


class TrendlineStore:
    """
    Persists the full set of trendlines as one JSON blob under a fixed key.

    Every save overwrites the whole set. Neither `save` nor `load` raise:
    failures are logged and reported as False / an empty list.
    """

    def __init__(
        self,
        store: KeyValueStore,
        storage_key: Optional[str] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._store = store
        self._key = storage_key or settings.TRENDLINE_STORAGE_KEY
        self._logger = logger or logging.getLogger(self.__class__.__name__)

    @staticmethod
    def validate(trendline: TrendlineLike) -> bool:
        """
        True when start.time < end.time, both prices are positive and all four
        values are finite. Not applied by save/load; callers gate on it.
        """
        if isinstance(trendline, TrendlineEntity):
            return trendline.is_valid()
        try:
            return TrendlineEntity.model_validate(trendline).is_valid()
        except (ValidationError, TypeError):
            return False

    @staticmethod
    def _strip_transient(trendline: TrendlineLike) -> Dict[str, Any]:
        if isinstance(trendline, TrendlineEntity):
            return trendline.to_storage()
        return {k: v for k, v in trendline.items() if k not in TRANSIENT_FIELDS}

    def save(self, trendlines: Sequence[TrendlineLike]) -> bool:
        try:
            records = [self._strip_transient(t) for t in trendlines]
            payload = json.dumps(records, allow_nan=False)
            self._store.set(self._key, payload)
        except Exception as exc:  # noqa: BLE001
            self._logger.error("Failed to save trendlines: %s", exc)
            return False

        self._logger.info("Saved %s trendlines", len(records))
        return True

    def load(self) -> List[Dict[str, Any]]:
        try:
            raw = self._store.get(self._key)
            if raw is None:
                return []
            data = json.loads(raw)
        except Exception as exc:  # noqa: BLE001
            self._logger.error("Failed to load trendlines: %s", exc)
            return []

        if not isinstance(data, list):
            self._logger.warning(
                "Stored trendlines under %s are not a list (%s); ignoring.",
                self._key,
                type(data).__name__,
            )
            return []

        self._logger.info("Loaded %s trendlines", len(data))
        return data
