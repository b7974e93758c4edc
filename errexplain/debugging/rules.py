"""Rule tables for translating console errors and for live tips.

Order matters in both tables: the first trigger found in the lower-cased
input wins, so more specific triggers are listed before broader ones.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True, slots=True)
class Translation:
    """Plain-language meaning of an error and what to try next."""

    meaning: str
    fix: str


@dataclass(frozen=True, slots=True)
class ClassificationRule:
    trigger: str
    meaning: str
    fix: str

    @property
    def translation(self) -> Translation:
        return Translation(meaning=self.meaning, fix=self.fix)


@dataclass(frozen=True, slots=True)
class SuggestionRule:
    trigger: str
    tip: str


FALLBACK_TRANSLATION = Translation(
    meaning="I couldn't fully recognize this error, but it usually means something is wrong in your code.",
    fix="Check the console line number and review the code around that part.",
)

ERROR_RULES: Tuple[ClassificationRule, ...] = (
    ClassificationRule(
        trigger="cannot read properties of null",
        meaning="Your JavaScript is trying to use an element that does not exist in your HTML.",
        fix="Make sure the element ID/class is correct, and your script runs after the HTML loads.",
    ),
    ClassificationRule(
        trigger="undefined",
        meaning="Your code is trying to use a variable or function that has no value yet.",
        fix="Check spelling and make sure the variable is declared before using it.",
    ),
    ClassificationRule(
        trigger="is not defined",
        meaning="JavaScript does not know what that variable/function is.",
        fix="Declare the variable or check if you typed the name correctly.",
    ),
    ClassificationRule(
        trigger="unexpected token",
        meaning="Your code has a syntax error (something typed wrong like extra comma, missing bracket, etc).",
        fix="Check the line number and look for missing quotes, commas, or brackets.",
    ),
    ClassificationRule(
        trigger="missing ) after argument list",
        meaning="You forgot to close a bracket ')' in a function call.",
        fix="Check your parentheses and make sure every '(' has a matching ')'.",
    ),
    ClassificationRule(
        trigger="failed to fetch",
        meaning="Your code tried to request data from an API or link, but it failed.",
        fix="Check your internet, API URL, and ensure CORS or server is working.",
    ),
    ClassificationRule(
        trigger="net::err",
        meaning="Your browser failed to load a file or resource (image, script, API, etc).",
        fix="Check the file path or link. Make sure the resource exists.",
    ),
    ClassificationRule(
        trigger="uncaught typeerror",
        meaning="Your code is using something incorrectly (wrong data type or missing element).",
        fix="Check the console line number and see what variable is causing the problem.",
    ),
    ClassificationRule(
        trigger="maximum call stack size exceeded",
        meaning="Your code is running a function infinitely (loop recursion).",
        fix="Check if your function calls itself repeatedly without stopping.",
    ),
    ClassificationRule(
        trigger="illegal invocation",
        meaning="You called a function in the wrong way or wrong object context.",
        fix="Make sure you're calling the function correctly (ex: document.method()).",
    ),
    ClassificationRule(
        trigger="cors",
        meaning="Your browser blocked an API request because of security rules (CORS policy).",
        fix="Try using a proper backend, use correct headers, or use an API that allows requests.",
    ),
    ClassificationRule(
        trigger="404",
        meaning="The file or page you're trying to access does not exist.",
        fix="Check the file path, spelling, and folder structure.",
    ),
    ClassificationRule(
        trigger="500",
        meaning="The server has an internal error. This is usually not your frontend fault.",
        fix="Try again later or check the backend server logs.",
    ),
)

DEFAULT_TIP = "💡 Tip: Always check the line number shown in your browser console."

SUGGESTION_RULES: Tuple[SuggestionRule, ...] = (
    SuggestionRule("null", "💡 Tip: Check if your element exists in HTML before selecting it in JavaScript."),
    SuggestionRule("undefined", "💡 Tip: Print your variables using console.log() to see their values."),
    SuggestionRule("syntax", "💡 Tip: Syntax errors are often caused by missing brackets or quotes."),
)


__all__ = [
    "ClassificationRule",
    "DEFAULT_TIP",
    "ERROR_RULES",
    "FALLBACK_TRANSLATION",
    "SUGGESTION_RULES",
    "SuggestionRule",
    "Translation",
]
