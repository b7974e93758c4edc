import io
from types import SimpleNamespace

from rich.console import Console

from errexplain.config import ErrexplainSettings
from errexplain.store import MemoryStore
from errexplain.tui.repl import IDLE_TOOLBAR, ErrexplainRepl
from errexplain.workspace import Workspace


class ManualScheduler:
    def __init__(self) -> None:
        self.pending = []

    def __call__(self, delay, callback):
        handle = SimpleNamespace(callback=callback, cancelled=False)
        handle.cancel = lambda: setattr(handle, "cancelled", True)
        self.pending.append(handle)
        return handle

    def flush(self) -> None:
        for handle in self.pending:
            if not handle.cancelled:
                handle.callback()
        self.pending = []


def make_repl(confirm=None):
    settings = ErrexplainSettings()
    workspace = Workspace(MemoryStore(), settings)
    output = io.StringIO()
    console = Console(file=output, width=200)
    scheduler = ManualScheduler()
    repl = ErrexplainRepl(settings, workspace, console, scheduler=scheduler, confirm=confirm)
    return repl, output, scheduler


def test_error_text_is_translated_and_recorded() -> None:
    repl, output, _ = make_repl()

    repl.handle_error_text("Uncaught RangeError: Maximum call stack size exceeded")

    assert "running a function infinitely" in output.getvalue()
    assert len(repl.workspace.history) == 1


def test_checklist_commands() -> None:
    repl, output, _ = make_repl()

    assert repl.handle_command("/toggle 2")
    assert repl.workspace.checklist.items()[1].done is True
    assert repl.handle_command("/add Read the docs")
    assert repl.workspace.checklist.items()[-1].text == "Read the docs"
    assert repl.handle_command("/delete 1")
    assert repl.workspace.checklist.items()[0].done is True
    assert repl.handle_command("/reset")
    assert repl.workspace.checklist.progress_percent() == 0

    repl.handle_command("/checklist docs")
    assert "Read the docs" in output.getvalue()


def test_bad_numbers_are_reported_not_applied() -> None:
    repl, output, _ = make_repl()

    repl.handle_command("/toggle zero")
    repl.handle_command("/toggle 0")
    repl.handle_command("/delete 999")

    text = output.getvalue()
    assert "needs a number" in text
    assert "No entry numbered 0" in text
    assert "No entry numbered 999" in text
    assert not any(item.done for item in repl.workspace.checklist.items())


def test_history_show_restores_an_entry() -> None:
    repl, output, _ = make_repl()
    repl.handle_error_text("GET /a.png 404")
    repl.handle_error_text("blocked by CORS policy")

    repl.handle_command("/history")
    repl.handle_command("/show 2")

    assert repl.workspace.last_input == "GET /a.png 404"
    assert "does not exist" in output.getvalue()


def test_clear_history_respects_confirmation() -> None:
    answers = iter([False, True])
    repl, _, _ = make_repl(confirm=lambda message: next(answers))
    repl.handle_error_text("GET /a.png 404")

    repl.handle_command("/clear-history")
    assert len(repl.workspace.history) == 1

    repl.handle_command("/clear-history")
    assert len(repl.workspace.history) == 0


def test_quit_and_unknown_commands() -> None:
    repl, output, _ = make_repl()

    assert repl.handle_command("/nope") is True
    assert "Unknown command: nope" in output.getvalue()
    assert repl.handle_command("/quit") is False
    assert repl.running is False


def test_live_tip_waits_for_quiet_input() -> None:
    repl, _, scheduler = make_repl()

    repl._on_text_changed(SimpleNamespace(text="TypeError: x"))
    repl._on_text_changed(SimpleNamespace(text="TypeError: x is undefined"))
    assert repl._bottom_toolbar() == IDLE_TOOLBAR

    scheduler.flush()

    assert "console.log()" in repl._bottom_toolbar()
    assert repl.workspace.last_input == "TypeError: x is undefined"


def test_live_tip_skips_commands_and_short_text() -> None:
    repl, _, scheduler = make_repl()

    repl._on_text_changed(SimpleNamespace(text="/toggle 1"))
    scheduler.flush()
    repl._on_text_changed(SimpleNamespace(text="null"))
    scheduler.flush()

    assert repl.tip is None
    assert repl.workspace.last_input == "null"
