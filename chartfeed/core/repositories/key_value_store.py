from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStore(ABC):
    """
    Minimal string key-value capability (the browser's localStorage, a file, ...).

    No transactional guarantee: concurrent writers race and the last write wins.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored string, or None if the key is absent."""
        raise NotImplementedError

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store `value` under `key`, replacing any previous value."""
        raise NotImplementedError
