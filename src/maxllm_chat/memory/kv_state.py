from __future__ import annotations

import json
import os
from pathlib import Path

from loguru import logger


class KeyValueState:
    """Synchronous string slots persisted as a single JSON object file.

    With ``path=None`` the slots live in memory only. Failures to read or
    write the file are logged and never raised: the in-memory values stay
    authoritative for the rest of the process.
    """

    def __init__(self, path: str | None = None):
        self._path = Path(path) if path else None
        self._values: dict[str, str] = self._read_file()

    def get_item(self, key: str) -> str | None:
        return self._values.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._values[key] = value
        self._write_file()

    def remove_item(self, key: str) -> None:
        if self._values.pop(key, None) is not None:
            self._write_file()

    def _read_file(self) -> dict[str, str]:
        if self._path is None or not self._path.exists():
            return {}
        try:
            with open(self._path, encoding="utf-8") as f:
                parsed = json.load(f)
        except (OSError, ValueError) as ex:
            logger.warning(f"Ignoring unreadable state file {self._path}: {ex}")
            return {}
        if not isinstance(parsed, dict):
            logger.warning(f"Ignoring state file {self._path}: expected a JSON object")
            return {}
        return {str(k): v for k, v in parsed.items() if isinstance(v, str)}

    def _write_file(self) -> None:
        if self._path is None:
            return
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(self._values, f, ensure_ascii=True)
            os.replace(tmp_path, self._path)
        except OSError as ex:
            logger.warning(f"Failed to write state file {self._path}: {ex}")
