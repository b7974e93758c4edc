"""Wire the translator, checklist, history and input draft to one store."""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from .checklist import Checklist
from .config import ErrexplainSettings
from .debugging import ErrorClassifier, SuggestionEngine, Translation
from .history import ErrorHistory
from .store.draft import InputDraft
from .store.kv import JsonFileStore, KeyValueStore

logger = logging.getLogger(__name__)

EMPTY_INPUT_TRANSLATION = Translation(
    meaning="Please paste an error first.",
    fix="Try copying an error from your console (F12 > Console).",
)


class Workspace:
    """Everything one session of the tool needs, loaded from a single store.

    Each slot falls back to its own default when it is missing or unreadable,
    so one damaged slot never costs the others.
    """

    def __init__(
        self,
        storage: KeyValueStore,
        settings: Optional[ErrexplainSettings] = None,
        *,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.settings = settings or ErrexplainSettings()
        self.storage = storage
        self.classifier = ErrorClassifier()
        self.suggestions = SuggestionEngine()
        self.checklist = Checklist.load(storage)
        self.history = ErrorHistory.load(
            storage,
            limit=self.settings.history_limit,
            excerpt_length=self.settings.excerpt_length,
            clock=clock,
        )
        self.draft = InputDraft(storage)
        self._last_input = self.draft.load()

    @classmethod
    def open(cls, settings: ErrexplainSettings) -> "Workspace":
        logger.debug("Opening state file %s", settings.state_file)
        return cls(JsonFileStore(settings.state_file), settings)

    @property
    def last_input(self) -> str:
        return self._last_input

    def remember_input(self, text: str) -> None:
        self._last_input = text
        self.draft.save(text)

    def forget_input(self) -> None:
        self.remember_input("")

    def translate(self, raw_text: str, *, record: bool = True) -> Translation:
        text = raw_text.strip()
        if not text:
            return EMPTY_INPUT_TRANSLATION
        result = self.classifier.classify(text)
        if record:
            self.history.record(text, result.meaning, result.fix)
        self.remember_input(text)
        return result

    def suggest(self, raw_text: str) -> Optional[str]:
        text = raw_text.strip()
        if len(text) <= self.settings.suggest_min_length:
            return None
        return self.suggestions.suggest(text)


__all__ = ["EMPTY_INPUT_TRANSLATION", "Workspace"]
