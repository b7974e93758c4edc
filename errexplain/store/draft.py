"""Remember the last raw error the user typed or pasted."""
from __future__ import annotations

from .kv import KeyValueStore, load_json, save_json

LAST_INPUT_KEY = "last_error_input"


class InputDraft:
    """Write-through slot for the most recent raw input."""

    def __init__(self, storage: KeyValueStore) -> None:
        self._storage = storage

    def load(self) -> str:
        value = load_json(self._storage, LAST_INPUT_KEY)
        return value if isinstance(value, str) else ""

    def save(self, text: str) -> bool:
        return save_json(self._storage, LAST_INPUT_KEY, text)


__all__ = ["InputDraft", "LAST_INPUT_KEY"]
