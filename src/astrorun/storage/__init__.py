"""High score persistence."""

from .base import KeyValueStore, MemoryStore
from .json_store import JsonFileStore
from .highscore import HighScoreKeeper

__all__ = ["KeyValueStore", "MemoryStore", "JsonFileStore", "HighScoreKeeper"]
