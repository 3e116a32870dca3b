"""Key-value storage providers holding serialized board snapshots."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Dict, Optional, Protocol

LOGGER = logging.getLogger(__name__)
DEFAULT_STATE_PATH = Path(
    os.environ.get("BINGO_STATE_PATH") or Path(__file__).resolve().parent / ".bingo_state.json"
)


class KeyValueStorage(Protocol):
    """Minimal string-keyed store, shaped after browser local storage."""

    def get_item(self, key: str) -> Optional[str]:
        ...

    def set_item(self, key: str, value: str) -> None:
        ...

    def remove_item(self, key: str) -> None:
        ...

    def keys(self) -> list[str]:
        ...

    def clear(self) -> None:
        ...


class MemoryStorage:
    """Process-local storage, mostly useful for tests."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def clear(self) -> None:
        self._items.clear()

    def keys(self) -> list[str]:
        return list(self._items)


class JsonFileStorage:
    """Store every key in a single JSON object on disk."""

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def get_item(self, key: str) -> Optional[str]:
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        items = self._read()
        items[key] = value
        self._write(items)

    def remove_item(self, key: str) -> None:
        items = self._read()
        if items.pop(key, None) is not None:
            self._write(items)

    def keys(self) -> list[str]:
        return [key for key, value in self._read().items() if isinstance(value, str)]

    def clear(self) -> None:
        """Remove the backing file entirely."""

        try:
            if self._path.exists():
                self._path.unlink()
        except OSError as exc:
            LOGGER.error("Failed to delete bingo state file %s: %s", self._path, exc)

    def _read(self) -> Dict[str, object]:
        if not self._path.exists():
            return {}
        try:
            payload = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError, RecursionError) as exc:
            LOGGER.error("Failed to read bingo state from %s: %s", self._path, exc)
            return {}
        if not isinstance(payload, dict):
            LOGGER.error("Ignoring bingo state file %s: expected a JSON object", self._path)
            return {}
        return payload

    def _write(self, items: Dict[str, object]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self._path.with_suffix(f"{self._path.suffix}.tmp")
            tmp_path.write_text(json.dumps(items, ensure_ascii=False, indent=2), encoding="utf-8")
            tmp_path.replace(self._path)
        except OSError as exc:
            LOGGER.error("Failed to persist bingo state to %s: %s", self._path, exc)


__all__ = ["DEFAULT_STATE_PATH", "JsonFileStorage", "KeyValueStorage", "MemoryStorage"]
