"""Terminal front end: REPL and shared Rich renderables."""

from .repl import ErrexplainRepl

__all__ = ["ErrexplainRepl"]
