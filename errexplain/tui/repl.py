"""Interactive REPL loop for errexplain."""
from __future__ import annotations

from typing import Callable, Optional

import typer
from prompt_toolkit import PromptSession
from prompt_toolkit.buffer import Buffer
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.patch_stdout import patch_stdout
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from ..config import ErrexplainSettings
from ..debounce import Debouncer, Scheduler
from ..workspace import Workspace
from .render import NO_HISTORY_MESSAGE, checklist_table, history_table, translation_panel

IDLE_TOOLBAR = "Paste an error and press Enter · /help for commands"


class ErrexplainRepl:
    """High-level orchestration for interactive errexplain sessions."""

    def __init__(
        self,
        settings: ErrexplainSettings,
        workspace: Workspace,
        console: Optional[Console] = None,
        *,
        scheduler: Optional[Scheduler] = None,
        confirm: Optional[Callable[[str], bool]] = None,
    ) -> None:
        self.settings = settings
        self.workspace = workspace
        self.console = console or Console(no_color=not settings.use_color)
        self.session: Optional[PromptSession] = None
        self.tip: Optional[str] = None
        self.running = True
        self._confirm = confirm or (lambda message: typer.confirm(message, default=False))
        self._debouncer = Debouncer(settings.suggest_delay, self._on_idle, scheduler=scheduler)

    # ------------------------------------------------------------------
    # lifecycle
    # ------------------------------------------------------------------
    def run(self) -> None:
        """Start the interactive prompt loop."""
        self.session = PromptSession(history=InMemoryHistory(), bottom_toolbar=self._bottom_toolbar)
        self.session.default_buffer.on_text_changed += self._on_text_changed
        self.console.print("Interactive session started. Type /help for commands.")
        default = self.workspace.last_input
        with patch_stdout():
            while self.running:
                try:
                    user_input = self.session.prompt("errx> ", default=default)
                except EOFError:
                    self.console.print("\nEOF received, closing the session.")
                    break
                finally:
                    self._debouncer.cancel()
                default = ""

                stripped = user_input.strip()
                if not stripped:
                    continue
                if stripped.startswith("/"):
                    if not self.handle_command(stripped):
                        break
                    continue
                self.handle_error_text(stripped)

    def shutdown(self) -> None:
        self._debouncer.cancel()

    # ------------------------------------------------------------------
    # live tip
    # ------------------------------------------------------------------
    def _bottom_toolbar(self) -> str:
        return self.tip or IDLE_TOOLBAR

    def _on_text_changed(self, buffer: Buffer) -> None:
        self._debouncer.trigger(buffer.text)

    def _on_idle(self, text: str) -> None:
        if text.lstrip().startswith("/"):
            return
        self.workspace.remember_input(text)
        tip = self.workspace.suggest(text)
        if tip is not None:
            self.tip = tip
            if self.session is not None:
                self.session.app.invalidate()

    # ------------------------------------------------------------------
    # error text
    # ------------------------------------------------------------------
    def handle_error_text(self, text: str) -> None:
        result = self.workspace.translate(text)
        self.console.print(translation_panel(result))

    # ------------------------------------------------------------------
    # commands
    # ------------------------------------------------------------------
    def handle_command(self, raw: str) -> bool:
        command, _, rest = raw[1:].strip().partition(" ")
        rest = rest.strip()
        if not command:
            return True

        if command in {"quit", "exit"}:
            self.console.print("Closing the session.")
            self.running = False
            return False
        if command == "help":
            self._command_help()
            return True
        if command == "checklist":
            self._command_checklist(rest)
            return True
        if command == "add":
            self._command_add(rest)
            return True
        if command == "toggle":
            self._command_toggle(rest)
            return True
        if command == "delete":
            self._command_delete(rest)
            return True
        if command == "reset":
            self._command_reset()
            return True
        if command == "history":
            self._command_history()
            return True
        if command == "show":
            self._command_show(rest)
            return True
        if command == "clear-history":
            self._command_clear_history()
            return True
        if command == "clear":
            self._command_clear()
            return True

        self.console.print(Text(f"Unknown command: {command}"))
        return True

    def _command_help(self) -> None:
        self.console.print(
            Panel(
                "\n".join(
                    [
                        "<error text> : translate a console error",
                        "/checklist [query] : show the checklist, optionally filtered",
                        "/add <label> : add a checklist item",
                        "/toggle <n> : tick or untick item n",
                        "/delete <n> : remove item n",
                        "/reset : untick every item",
                        "/history : list recent errors",
                        "/show <n> : show history entry n again",
                        "/clear-history : forget all recent errors",
                        "/clear : forget the saved input",
                        "/quit : leave the session",
                    ]
                ),
                title="Commands",
            )
        )

    def _command_checklist(self, query: str) -> None:
        self.console.print(checklist_table(self.workspace.checklist, query))

    def _command_add(self, label: str) -> None:
        item = self.workspace.checklist.add(label)
        if item is None:
            self.console.print("/add needs a non-empty label.")
            return
        self.console.print(Text(f"Added: {item.text}"))

    def _command_toggle(self, value: str) -> None:
        index = self._parse_number(value, "/toggle")
        if index is None:
            return
        item = self.workspace.checklist.toggle(index)
        if item is None:
            self._out_of_range(value)
            return
        state = "done" if item.done else "not done"
        self.console.print(Text(f"{item.text} → {state} ({self.workspace.checklist.progress_percent()}%)"))

    def _command_delete(self, value: str) -> None:
        index = self._parse_number(value, "/delete")
        if index is None:
            return
        item = self.workspace.checklist.delete(index)
        if item is None:
            self._out_of_range(value)
            return
        self.console.print(Text(f"Deleted: {item.text}"))

    def _command_reset(self) -> None:
        self.workspace.checklist.reset_progress()
        self.console.print("Checklist progress reset to 0%.")

    def _command_history(self) -> None:
        records = self.workspace.history.list()
        if not records:
            self.console.print(NO_HISTORY_MESSAGE)
            return
        self.console.print(history_table(records))

    def _command_show(self, value: str) -> None:
        position = self._parse_number(value, "/show")
        if position is None:
            return
        record = self.workspace.history.get(position)
        if record is None:
            self._out_of_range(value)
            return
        self.workspace.remember_input(record.input_excerpt)
        self.console.print(Text(record.input_excerpt, style="bold"))
        self.console.print(translation_panel(record.translation, title=record.timestamp))

    def _command_clear_history(self) -> None:
        if not self._confirm("Are you sure you want to clear your history?"):
            return
        self.workspace.history.clear()
        self.console.print("History cleared.")

    def _command_clear(self) -> None:
        self.workspace.forget_input()
        self.tip = None
        self.console.print("Saved input cleared.")

    # ------------------------------------------------------------------
    # utils
    # ------------------------------------------------------------------
    def _parse_number(self, value: str, command: str) -> Optional[int]:
        try:
            return int(value) - 1
        except ValueError:
            self.console.print(f"{command} needs a number from the list.")
            return None

    def _out_of_range(self, value: str) -> None:
        self.console.print(Text(f"No entry numbered {value}."))


__all__ = ["ErrexplainRepl"]
