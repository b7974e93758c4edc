"""Entry point for the errexplain CLI experience."""
from __future__ import annotations

import json
import logging
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.text import Text

from .config import ErrexplainSettings, load_config
from .tui.render import NO_HISTORY_MESSAGE, checklist_table, history_table, translation_panel
from .tui.repl import ErrexplainRepl
from .workspace import Workspace

app = typer.Typer(add_completion=False, rich_markup_mode="rich")
checklist_app = typer.Typer(help="Work through the debugging checklist.")
history_app = typer.Typer(help="Browse or clear recently translated errors.")
app.add_typer(checklist_app, name="checklist")
app.add_typer(history_app, name="history")


@dataclass
class CliState:
    settings: ErrexplainSettings
    console: Console
    source: Optional[Path] = None
    _workspace: Optional[Workspace] = None

    @property
    def workspace(self) -> Workspace:
        if self._workspace is None:
            self._workspace = Workspace.open(self.settings)
        return self._workspace


def _create_console(use_color: bool) -> Console:
    return Console(no_color=not use_color, highlight=use_color)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )
    logging.getLogger("errexplain").setLevel(level)


def _state(ctx: typer.Context) -> CliState:
    return ctx.obj


def _join_text(parts: Optional[List[str]]) -> str:
    if parts:
        return " ".join(parts)
    return typer.get_text_stream("stdin").read()


@app.callback(invoke_without_command=True)
def _root(
    ctx: typer.Context,
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file to use.",
    ),
    state_file: Optional[Path] = typer.Option(
        None,
        "--state-file",
        help="Where the checklist, history and last input are stored.",
    ),
    color: Optional[bool] = typer.Option(
        None,
        "--color/--no-color",
        help="Force coloured output on or off.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug logging.",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Print the effective configuration and exit.",
    ),
) -> None:
    """Translate console errors into plain language. Starts an interactive session by default."""
    try:
        loaded = load_config(config_path)
    except (ValidationError, tomllib.TOMLDecodeError, OSError) as exc:
        Console(stderr=True).print(Text(f"Invalid configuration: {exc}"))
        raise typer.Exit(code=2) from exc

    settings = loaded.settings
    updates: dict[str, object] = {}
    if state_file is not None:
        updates["state_file"] = state_file.expanduser()
    if color is not None:
        updates["use_color"] = color
    if verbose:
        updates["log_level"] = "DEBUG"
    if updates:
        settings = settings.model_copy(update=updates)

    _configure_logging(settings.log_level)
    console = _create_console(settings.use_color)
    ctx.obj = CliState(settings=settings, console=console, source=loaded.source)

    if dry_run:
        payload = json.dumps(settings.to_dict(), indent=2, ensure_ascii=False)
        subtitle = str(loaded.source) if loaded.source else "defaults"
        console.print(Panel(Text(payload), title="configuration", subtitle=subtitle))
        raise typer.Exit()

    if ctx.invoked_subcommand is not None:
        return

    repl = ErrexplainRepl(settings=settings, workspace=ctx.obj.workspace, console=console)
    try:
        repl.run()
    except KeyboardInterrupt:
        console.print("\nClosing the session.")
    finally:
        repl.shutdown()


@app.command()
def explain(
    ctx: typer.Context,
    text: Optional[List[str]] = typer.Argument(None, help="Error text; read from stdin when omitted."),
    record: bool = typer.Option(True, "--record/--no-record", help="Add the result to the history."),
) -> None:
    """Explain an error message and suggest a fix."""
    state = _state(ctx)
    raw = _join_text(text)
    workspace = state.workspace
    result = workspace.translate(raw, record=record)
    rule = workspace.classifier.match(raw.strip()) if raw.strip() else None
    subtitle = f"matched '{rule.trigger}'" if rule else None
    state.console.print(translation_panel(result, subtitle=subtitle))


@app.command()
def suggest(
    ctx: typer.Context,
    text: Optional[List[str]] = typer.Argument(None, help="Error text; read from stdin when omitted."),
) -> None:
    """Print a quick tip for an error message."""
    state = _state(ctx)
    raw = _join_text(text)
    state.console.print(Text(state.workspace.suggestions.suggest(raw.strip())))


@checklist_app.command("show")
def checklist_show(
    ctx: typer.Context,
    search: str = typer.Option("", "--search", "-s", help="Only show items containing this text."),
) -> None:
    """Show the checklist and the completion percentage."""
    state = _state(ctx)
    state.console.print(checklist_table(state.workspace.checklist, search))


@checklist_app.command("add")
def checklist_add(ctx: typer.Context, label: List[str] = typer.Argument(..., help="Text of the new item.")) -> None:
    """Add a custom item to the checklist."""
    state = _state(ctx)
    item = state.workspace.checklist.add(" ".join(label))
    if item is None:
        state.console.print("The checklist item needs some text.")
        raise typer.Exit(code=1)
    state.console.print(Text(f"Added #{len(state.workspace.checklist)}: {item.text}"))


@checklist_app.command("toggle")
def checklist_toggle(ctx: typer.Context, number: int = typer.Argument(..., help="Item number as shown.")) -> None:
    """Tick or untick an item."""
    state = _state(ctx)
    checklist = state.workspace.checklist
    item = checklist.toggle(number - 1)
    if item is None:
        state.console.print(f"There is no checklist item #{number}.")
        raise typer.Exit(code=1)
    mark = "done" if item.done else "not done"
    state.console.print(Text(f"#{number} {item.text} → {mark} ({checklist.progress_percent()}% complete)"))


@checklist_app.command("delete")
def checklist_delete(ctx: typer.Context, number: int = typer.Argument(..., help="Item number as shown.")) -> None:
    """Remove an item; later items move up by one."""
    state = _state(ctx)
    item = state.workspace.checklist.delete(number - 1)
    if item is None:
        state.console.print(f"There is no checklist item #{number}.")
        raise typer.Exit(code=1)
    state.console.print(Text(f"Deleted: {item.text}"))


@checklist_app.command("reset")
def checklist_reset(ctx: typer.Context) -> None:
    """Untick every item without removing any."""
    state = _state(ctx)
    state.workspace.checklist.reset_progress()
    state.console.print("Checklist progress reset to 0%.")


@history_app.command("show")
def history_show(
    ctx: typer.Context,
    limit: Optional[int] = typer.Option(None, "--limit", "-n", min=1, help="Show at most this many records."),
) -> None:
    """List recent errors, newest first."""
    state = _state(ctx)
    records = state.workspace.history.list()
    if not records:
        state.console.print(NO_HISTORY_MESSAGE)
        return
    state.console.print(history_table(records, limit=limit))


@history_app.command("clear")
def history_clear(
    ctx: typer.Context,
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation."),
) -> None:
    """Forget every recorded error."""
    state = _state(ctx)
    if not yes and not typer.confirm("Are you sure you want to clear your history?", default=False):
        state.console.print("History kept.")
        return
    state.workspace.history.clear()
    state.console.print("History cleared.")


def entrypoint() -> None:
    """Typer entrypoint for `errx`."""
    app()


if __name__ == "__main__":  # pragma: no cover
    entrypoint()
