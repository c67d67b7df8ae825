"""
Abstract key-value store interface.

Stores may raise OSError or ValueError on failure; callers that must
not crash (see HighScoreKeeper) catch those.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class KeyValueStore(ABC):
    """Abstract base class for persistent key-value stores."""

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        """Return the stored value, or None if the key is absent."""
        ...

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Store a value under key, replacing any previous one."""
        ...


class MemoryStore(KeyValueStore):
    """In-process store. Useful for headless hosts and tests."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None) -> None:
        self._data: Dict[str, Any] = dict(initial or {})
        self.writes = 0

    def get(self, key: str) -> Optional[Any]:
        return self._data.get(key)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value
        self.writes += 1
