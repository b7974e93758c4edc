"""Key-value blob stores used to keep state between sessions."""
from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional, Protocol

logger = logging.getLogger(__name__)


class StorageError(RuntimeError):
    """Raised when a value cannot be written to the backing store."""


class KeyValueStore(Protocol):
    """Minimal string-to-string store, in the spirit of browser localStorage."""

    def get(self, key: str) -> Optional[str]:  # pragma: no cover - protocol
        ...

    def set(self, key: str, value: str) -> None:  # pragma: no cover - protocol
        ...


class MemoryStore:
    """Keeps values in a dict for the lifetime of the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStore:
    """Persist every key in a single JSON object on disk.

    Reads never fail: a missing, unreadable or malformed file behaves like an
    empty store. Writes replace the file atomically and raise ``StorageError``
    when the filesystem refuses them.
    """

    def __init__(self, path: Path) -> None:
        self.path = path.expanduser()

    def get(self, key: str) -> Optional[str]:
        value = self._read().get(key)
        if value is None:
            return None
        if not isinstance(value, str):
            logger.warning("Ignoring non-string value for %r in %s", key, self.path)
            return None
        return value

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def _read(self) -> Dict[str, object]:
        if not self.path.exists():
            return {}
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            logger.warning("Could not read state file %s: %s", self.path, exc)
            return {}
        if not isinstance(payload, dict):
            logger.warning("State file %s does not hold a JSON object", self.path)
            return {}
        return payload

    def _write(self, data: Dict[str, object]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(data, fh, indent=2)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except (OSError, ValueError) as exc:
            raise StorageError(f"Could not write state file {self.path}: {exc}") from exc


def load_json(storage: KeyValueStore, key: str) -> object:
    """Decode the JSON value under ``key``; ``None`` when absent or malformed."""
    raw = storage.get(key)
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except (TypeError, json.JSONDecodeError):
        logger.warning("Ignoring malformed value stored under %r", key)
        return None


def save_json(storage: KeyValueStore, key: str, value: object) -> bool:
    """Encode and store ``value``; returns ``False`` if the write failed."""
    try:
        storage.set(key, json.dumps(value, ensure_ascii=False))
    except (StorageError, OSError, TypeError, ValueError) as exc:
        logger.warning("State for %r was not saved: %s", key, exc)
        return False
    return True


__all__ = ["JsonFileStore", "KeyValueStore", "MemoryStore", "StorageError", "load_json", "save_json"]
