"""입력 중인 에러 텍스트에 대한 짧은 팁을 만든다."""

from __future__ import annotations

from typing import Sequence

from .rules import DEFAULT_TIP, SUGGESTION_RULES, SuggestionRule


class SuggestionEngine:
    """오류 번역기와 별도로 동작하는 간단한 팁 생성기."""

    def __init__(
        self,
        rules: Sequence[SuggestionRule] = SUGGESTION_RULES,
        default_tip: str = DEFAULT_TIP,
    ) -> None:
        self._rules = tuple(rules)
        self._default_tip = default_tip

    def suggest(self, raw_text: str) -> str:
        text = raw_text.lower()
        for rule in self._rules:
            if rule.trigger in text:
                return rule.tip
        return self._default_tip


_default_engine = SuggestionEngine()


def suggest(raw_text: str) -> str:
    return _default_engine.suggest(raw_text)


__all__ = ["SuggestionEngine", "suggest"]
