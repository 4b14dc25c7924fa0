"""File-backed implementation of KeyValueStorage.

Each key is one ``<key>.json`` file inside the data directory.
"""

from __future__ import annotations

import re
from pathlib import Path

from orderform.domain.repository.key_value_storage import KeyValueStorage

_KEY_PATTERN = re.compile(r"[A-Za-z0-9_.-]+")


class FileKeyValueStorage(KeyValueStorage):

    def __init__(self, data_dir: Path) -> None:
        self._data_dir = data_dir

    # --- KeyValueStorage interface --------------------------------------------

    def get_item(self, key: str) -> str | None:
        path = self._path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        self._ensure_dir()
        self._path_for(key).write_text(value, encoding="utf-8")

    # --- File helpers ---------------------------------------------------------

    def _path_for(self, key: str) -> Path:
        if not _KEY_PATTERN.fullmatch(key) or key.startswith("."):
            raise ValueError(f"Invalid storage key {key!r}")
        return self._data_dir / f"{key}.json"

    def _ensure_dir(self) -> None:
        self._data_dir.mkdir(parents=True, exist_ok=True)
