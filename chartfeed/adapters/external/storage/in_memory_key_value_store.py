from typing import Dict, Optional

from chartfeed.core.repositories.key_value_store import KeyValueStore


class InMemoryKeyValueStore(KeyValueStore):
    """
    Process-local KeyValueStore. Nothing survives a restart.
    """

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value
