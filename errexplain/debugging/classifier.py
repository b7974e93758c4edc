"""Lightweight heuristics that turn console errors into plain language."""
from __future__ import annotations

from typing import Optional, Sequence

from .rules import ERROR_RULES, FALLBACK_TRANSLATION, ClassificationRule, Translation


class ErrorClassifier:
    """Provide human-readable explanations for raw error text.

    Rules are scanned in declaration order and the first one whose trigger
    occurs in the lower-cased input wins. The scan stays linear because
    matching is containment, not equality.
    """

    def __init__(
        self,
        rules: Sequence[ClassificationRule] = ERROR_RULES,
        fallback: Translation = FALLBACK_TRANSLATION,
    ) -> None:
        self._rules = tuple(rules)
        self._fallback = fallback

    def match(self, raw_text: str) -> Optional[ClassificationRule]:
        text = raw_text.lower()
        for rule in self._rules:
            if rule.trigger in text:
                return rule
        return None

    def classify(self, raw_text: str) -> Translation:
        rule = self.match(raw_text)
        if rule is None:
            return self._fallback
        return rule.translation


_default_classifier = ErrorClassifier()


def classify(raw_text: str) -> Translation:
    """Translate ``raw_text`` with the built-in rule table."""
    return _default_classifier.classify(raw_text)


__all__ = ["ErrorClassifier", "classify"]
