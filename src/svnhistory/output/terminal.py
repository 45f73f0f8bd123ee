"""Rich terminal reporter — revision table and per-path changes."""

from __future__ import annotations

from typing import Iterable, Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from svnhistory.svn.models import ChangeKind, ChangeRecord, CopyPath, RevisionRecord

_CHANGE_STYLE = {
    ChangeKind.ADD: "bold green",
    ChangeKind.EDIT: "bold yellow",
    ChangeKind.DELETE: "bold red",
    ChangeKind.REPLACE: "bold magenta",
    ChangeKind.COPY: "bold cyan",
    ChangeKind.RESET: "bold blue",
}

_CHANGE_LETTER = {
    ChangeKind.ADD: "A",
    ChangeKind.EDIT: "M",
    ChangeKind.DELETE: "D",
    ChangeKind.REPLACE: "R",
    ChangeKind.COPY: "C",
    ChangeKind.RESET: "~",
}


def _change_pill(kind: ChangeKind) -> Text:
    return Text(f" {_CHANGE_LETTER[kind]} ", style=_CHANGE_STYLE.get(kind, ""))


def _change_line(change: ChangeRecord) -> Text:
    line = Text("  ")
    line.append_text(_change_pill(change.change_kind))
    suffix = "/" if change.node_kind.value == "directory" else ""
    line.append(f" {change.target_path}{suffix}")
    if isinstance(change.path, CopyPath):
        line.append(
            f"  (from {change.path.copy_from_path}@{change.path.copy_from_revision})",
            style="dim",
        )
    return line


def render(
    records: Iterable[RevisionRecord],
    *,
    show_paths: bool = True,
    console: Optional[Console] = None,
) -> None:
    """Print revision records to the terminal using Rich."""
    console = console or Console()
    records = list(records)

    if not records:
        console.print("[dim]No revisions.[/dim]")
        return

    table = Table(title="Revisions", title_style="bold", border_style="dim", show_lines=show_paths)
    table.add_column("Rev", justify="right", style="green", no_wrap=True)
    table.add_column("Author", style="cyan", no_wrap=True)
    table.add_column("Date", style="magenta", no_wrap=True)
    table.add_column("Message", min_width=20)
    table.add_column("Changes", justify="right", no_wrap=True)

    for record in records:
        date = record.time.strftime("%Y-%m-%d %H:%M:%S") if record.time else "-"
        message: Text = Text(record.summary)
        if show_paths and record.changes:
            for change in record.changes:
                message.append("\n")
                message.append_text(_change_line(change))
        table.add_row(
            f"r{record.revision}",
            record.author or "-",
            date,
            message,
            str(len(record.changes)),
        )

    console.print(table)
