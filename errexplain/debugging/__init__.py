"""Rule-based error translation and live tips."""

from .classifier import ErrorClassifier, classify
from .rules import (
    DEFAULT_TIP,
    ERROR_RULES,
    FALLBACK_TRANSLATION,
    SUGGESTION_RULES,
    ClassificationRule,
    SuggestionRule,
    Translation,
)
from .suggestions import SuggestionEngine, suggest

__all__ = [
    "ClassificationRule",
    "DEFAULT_TIP",
    "ERROR_RULES",
    "ErrorClassifier",
    "FALLBACK_TRANSLATION",
    "SUGGESTION_RULES",
    "SuggestionEngine",
    "SuggestionRule",
    "Translation",
    "classify",
    "suggest",
]
