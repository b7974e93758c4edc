"""Rich renderables shared by the CLI and the REPL."""
from __future__ import annotations

from typing import Iterable, Optional, Tuple

from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..checklist import Checklist, ChecklistItem
from ..debugging import Translation
from ..history import HistoryRecord

NO_HISTORY_MESSAGE = "No history yet. Translate an error first."


def translation_panel(
    result: Translation,
    *,
    title: str = "Translated error",
    subtitle: Optional[str] = None,
) -> Panel:
    body = Group(
        Text(result.meaning),
        Text(""),
        Text("Suggested fix: ", style="bold") + Text(result.fix),
    )
    return Panel(body, title=title, subtitle=subtitle)


def checklist_table(checklist: Checklist, query: str = "") -> Table:
    rows: Iterable[Tuple[int, ChecklistItem]] = checklist.filter(query)
    title = f"Debug checklist · {checklist.progress_percent()}% done"
    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("#", justify="right", width=4)
    table.add_column("Done", justify="center", width=4)
    table.add_column("Item")
    for index, item in rows:
        table.add_row(str(index + 1), "✔" if item.done else "", Text(item.text))
    return table


def history_table(records: Iterable[HistoryRecord], *, limit: Optional[int] = None) -> Table:
    table = Table(title="Recent errors (newest first)", show_header=True, header_style="bold")
    table.add_column("#", justify="right", width=4)
    table.add_column("When", width=19)
    table.add_column("Error", max_width=50)
    table.add_column("Meaning")
    for position, record in enumerate(records, start=1):
        if limit is not None and position > limit:
            break
        table.add_row(str(position), record.timestamp, Text(record.input_excerpt), Text(record.meaning))
    return table


__all__ = ["NO_HISTORY_MESSAGE", "checklist_table", "history_table", "translation_panel"]
