"""Persistence helpers for checklist, history and input state."""

from .draft import LAST_INPUT_KEY, InputDraft
from .kv import JsonFileStore, KeyValueStore, MemoryStore, StorageError

__all__ = [
    "InputDraft",
    "JsonFileStore",
    "KeyValueStore",
    "LAST_INPUT_KEY",
    "MemoryStore",
    "StorageError",
]
