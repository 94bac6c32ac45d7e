"""Local fallback store: string slots keyed by name, kept in one JSON file on disk."""
import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Dict, Optional

from mealrota.infra.paths import LOCAL_STORE_FILE

logger = logging.getLogger(__name__)


class LocalStore:
    def __init__(self, path: Path = LOCAL_STORE_FILE):
        self.path = Path(path)

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Local store %s unreadable, treating as empty: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def get_item(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        """Write one slot. The file is replaced atomically, so a write never lands half-way."""
        slots = self._read_all()
        slots[key] = value
        self._atomic_write(slots)

    def remove_item(self, key: str) -> None:
        slots = self._read_all()
        if slots.pop(key, None) is not None:
            self._atomic_write(slots)

    def _atomic_write(self, slots: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=str(self.path.parent), prefix=".local_store_", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                json.dump(slots, tmp, ensure_ascii=False)
            shutil.move(tmp_path, str(self.path))
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
