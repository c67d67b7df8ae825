"""Best-effort high score persistence on top of a key-value store."""

import logging

from astrorun.storage.base import KeyValueStore

logger = logging.getLogger(__name__)

DEFAULT_KEY = "astroRunHighScore"


class HighScoreKeeper:
    """Reads the high score once at startup and writes new records.

    Store failures never propagate: an unreadable value counts as 0 and
    a failed write is logged and dropped.
    """

    def __init__(self, store: KeyValueStore, key: str = DEFAULT_KEY) -> None:
        self.store = store
        self.key = key

    def load(self) -> int:
        """Return the persisted high score, or 0 if absent or unreadable."""
        try:
            raw = self.store.get(self.key)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read high score: {e}")
            return 0

        if raw is None:
            return 0

        if isinstance(raw, bool):
            logger.warning(f"Ignoring malformed high score {raw!r}")
            return 0

        try:
            value = int(raw)
        except (TypeError, ValueError, OverflowError):
            logger.warning(f"Ignoring malformed high score {raw!r}")
            return 0

        if value < 0:
            logger.warning(f"Ignoring negative high score {value}")
            return 0

        logger.info(f"Loaded high score: {value}")
        return value

    def save(self, value: int) -> bool:
        """Persist a new high score. Returns False if the write failed."""
        try:
            self.store.set(self.key, int(value))
        except (OSError, TypeError, ValueError) as e:
            logger.warning(f"Could not save high score {value}: {e}")
            return False

        logger.info(f"Saved high score: {value}")
        return True
