"""JSON file backed key-value store."""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from astrorun.storage.base import KeyValueStore

logger = logging.getLogger(__name__)


class JsonFileStore(KeyValueStore):
    """Keeps all keys in a single JSON object on disk.

    Writes go to a temporary file first and are moved into place with
    os.replace, so a crash mid-write leaves the previous file intact.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def _read_all(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}

        data = json.loads(self.path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} does not contain a JSON object")
        return data

    def get(self, key: str) -> Optional[Any]:
        return self._read_all().get(key)

    def set(self, key: str, value: Any) -> None:
        try:
            data = self._read_all()
        except ValueError as e:
            logger.warning(f"Replacing unreadable store {self.path}: {e}")
            data = {}

        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)

        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            tmp_path.write_text(json.dumps(data, indent=2, sort_keys=True), encoding="utf-8")
            os.replace(tmp_path, self.path)
        except OSError:
            if tmp_path.exists():
                tmp_path.unlink()
            raise

        logger.debug(f"Stored {key}={value!r} in {self.path}")
