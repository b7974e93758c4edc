"""번역한 에러 히스토리를 관리하는 모듈."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional

from .debugging.rules import Translation
from .store.kv import KeyValueStore, load_json, save_json

logger = logging.getLogger(__name__)

HISTORY_KEY = "error_history_list"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True, slots=True)
class HistoryRecord:
    """단일 에러 번역 기록."""

    input_excerpt: str
    meaning: str
    fix: str
    timestamp: str

    @property
    def translation(self) -> Translation:
        return Translation(meaning=self.meaning, fix=self.fix)

    def to_dict(self) -> dict:
        return {
            "error": self.input_excerpt,
            "translation": self.meaning,
            "fix": self.fix,
            "date": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "HistoryRecord":
        fields = (data["error"], data["translation"], data["fix"], data["date"])
        if not all(isinstance(value, str) for value in fields):
            raise TypeError("history fields must be strings")
        return cls(
            input_excerpt=fields[0],
            meaning=fields[1],
            fix=fields[2],
            timestamp=fields[3],
        )


class ErrorHistory:
    """최근 번역 기록을 메모리/저장소로 관리한다.

    내부 목록은 오래된 순서로 유지하고, ``list()``에서만 최신순으로 뒤집는다.
    """

    def __init__(
        self,
        storage: KeyValueStore,
        *,
        limit: int = 20,
        excerpt_length: int = 150,
        entries: Optional[List[HistoryRecord]] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._storage = storage
        self._limit = limit
        self._excerpt_length = excerpt_length
        self._clock = clock
        self._entries: List[HistoryRecord] = list(entries or [])[-limit:]

    def __len__(self) -> int:
        return len(self._entries)

    def record(self, input_text: str, meaning: str, fix: str) -> HistoryRecord:
        entry = HistoryRecord(
            input_excerpt=input_text[: self._excerpt_length],
            meaning=meaning,
            fix=fix,
            timestamp=self._clock().strftime(TIMESTAMP_FORMAT),
        )
        self._entries.append(entry)
        if len(self._entries) > self._limit:
            self._entries = self._entries[-self._limit :]
        self.save()
        return entry

    def clear(self) -> None:
        self._entries = []
        self.save()

    def list(self) -> List[HistoryRecord]:
        return list(reversed(self._entries))

    def get(self, position: int) -> Optional[HistoryRecord]:
        """``list()`` 기준 위치의 기록을 반환한다. 범위를 벗어나면 None."""
        if not 0 <= position < len(self._entries):
            return None
        return self._entries[-1 - position]

    def to_payload(self) -> list:
        return [entry.to_dict() for entry in self._entries]

    def save(self) -> bool:
        return save_json(self._storage, HISTORY_KEY, self.to_payload())

    @classmethod
    def load(
        cls,
        storage: KeyValueStore,
        *,
        limit: int = 20,
        excerpt_length: int = 150,
        clock: Callable[[], datetime] = datetime.now,
    ) -> "ErrorHistory":
        payload = load_json(storage, HISTORY_KEY)
        entries: List[HistoryRecord] = []
        if payload is not None:
            try:
                if not isinstance(payload, list):
                    raise TypeError("history must be a list")
                entries = [HistoryRecord.from_dict(item) for item in payload]
            except (KeyError, TypeError) as exc:
                logger.warning("Discarding unreadable history: %s", exc)
                entries = []
        return cls(storage, limit=limit, excerpt_length=excerpt_length, entries=entries, clock=clock)


__all__ = ["ErrorHistory", "HISTORY_KEY", "HistoryRecord"]
