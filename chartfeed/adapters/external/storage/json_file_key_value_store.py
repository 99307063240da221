import json
import logging
import os
from pathlib import Path
from typing import Dict, Optional

from chartfeed.core.repositories.key_value_store import KeyValueStore


class JsonFileKeyValueStore(KeyValueStore):
    """
    KeyValueStore backed by a single JSON object file on disk.

    Every `set` rewrites the whole file through a temp file + os.replace, so a
    crash mid-write leaves the previous content in place.
    """

    def __init__(self, path: str | Path, logger: Optional[logging.Logger] = None):
        self._path = Path(path)
        self._logger = logger or logging.getLogger(self.__class__.__name__)

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> Dict[str, str]:
        if not self._path.exists():
            return {}
        raw = self._path.read_text(encoding="utf-8")
        if not raw.strip():
            return {}
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise ValueError(f"{self._path} does not contain a JSON object")
        return data

    def get(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        return None if value is None else str(value)

    def set(self, key: str, value: str) -> None:
        try:
            data = self._read_all()
        except ValueError as exc:
            self._logger.warning("Discarding unreadable store %s: %s", self._path, exc)
            data = {}
        data[key] = value

        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            tmp_path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
            os.replace(tmp_path, self._path)
        finally:
            tmp_path.unlink(missing_ok=True)
        self._logger.debug("Wrote key %s to %s", key, self._path)
