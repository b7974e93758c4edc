"""디버깅 체크리스트 데이터 모델과 저장소."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

from .store.kv import KeyValueStore, load_json, save_json

logger = logging.getLogger(__name__)

CHECKLIST_KEY = "debug_checklist_items"

DEFAULT_CHECKLIST: Tuple[str, ...] = (
    "Check the console for the exact error line number.",
    "Make sure your script.js is linked correctly in HTML.",
    "Check if your element ID matches your JavaScript selector.",
    "Make sure your script is placed before </body>.",
    "Refresh your browser using Ctrl + Shift + R.",
    "Check if your function is being called correctly.",
    "Make sure your variables are declared properly.",
    "Look for missing brackets: { } ( ) [ ].",
    "Check spelling mistakes in variable names.",
    "Check for missing semicolons or commas.",
    "Make sure you didn't forget return in your function.",
    "If using localStorage, check if the key exists first.",
    "Check if your API URL or fetch request is correct.",
    "If using arrays, confirm index is valid.",
    "Check if your CSS is overriding your design.",
    "Test your website on mobile using Inspect Element.",
)


@dataclass(slots=True)
class ChecklistItem:
    """단일 체크리스트 항목."""

    text: str
    done: bool = False

    def to_dict(self) -> dict:
        return {"text": self.text, "done": self.done}

    @classmethod
    def from_dict(cls, data: dict) -> "ChecklistItem":
        text = data["text"]
        done = data.get("done", False)
        if not isinstance(text, str) or not isinstance(done, bool):
            raise TypeError("checklist item needs a string text and a boolean done flag")
        return cls(text=text, done=done)


def default_items() -> List[ChecklistItem]:
    return [ChecklistItem(text=text) for text in DEFAULT_CHECKLIST]


class Checklist:
    """Ordered checklist whose every change is written straight to storage.

    Items are addressed by position; deleting one shifts the positions of the
    items after it. Out-of-range positions and blank labels are ignored and
    reported by returning ``None``.
    """

    def __init__(self, storage: KeyValueStore, items: Optional[Sequence[ChecklistItem]] = None) -> None:
        self._storage = storage
        self._items: List[ChecklistItem] = default_items() if items is None else list(items)

    def __len__(self) -> int:
        return len(self._items)

    def items(self) -> List[ChecklistItem]:
        return [ChecklistItem(text=item.text, done=item.done) for item in self._items]

    def add(self, label: str) -> Optional[ChecklistItem]:
        text = label.strip()
        if not text:
            return None
        item = ChecklistItem(text=text)
        self._items.append(item)
        self.save()
        return item

    def toggle(self, index: int) -> Optional[ChecklistItem]:
        if not 0 <= index < len(self._items):
            return None
        item = self._items[index]
        item.done = not item.done
        self.save()
        return item

    def delete(self, index: int) -> Optional[ChecklistItem]:
        if not 0 <= index < len(self._items):
            return None
        item = self._items.pop(index)
        self.save()
        return item

    def reset_progress(self) -> None:
        for item in self._items:
            item.done = False
        self.save()

    def filter(self, query: str = "") -> Iterator[Tuple[int, ChecklistItem]]:
        needle = query.lower()
        for index, item in enumerate(self._items):
            if needle in item.text.lower():
                yield index, item

    def progress_percent(self) -> int:
        total = len(self._items)
        if total == 0:
            return 0
        done = sum(1 for item in self._items if item.done)
        # half-up, like Math.round
        return int(math.floor(done / total * 100 + 0.5))

    def to_payload(self) -> list:
        return [item.to_dict() for item in self._items]

    def save(self) -> bool:
        return save_json(self._storage, CHECKLIST_KEY, self.to_payload())

    @classmethod
    def load(cls, storage: KeyValueStore) -> "Checklist":
        payload = load_json(storage, CHECKLIST_KEY)
        if payload is None:
            return cls(storage)
        try:
            if not isinstance(payload, list):
                raise TypeError("checklist must be a list")
            items = [ChecklistItem.from_dict(entry) for entry in payload]
        except (KeyError, TypeError, AttributeError) as exc:
            logger.warning("Discarding unreadable checklist, using defaults: %s", exc)
            return cls(storage)
        return cls(storage, items)


__all__ = ["CHECKLIST_KEY", "Checklist", "ChecklistItem", "DEFAULT_CHECKLIST", "default_items"]
