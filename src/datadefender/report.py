"""Terminal rendering of discovery findings."""

from __future__ import annotations
from typing import Optional, Sequence, Union
from rich import box
from rich.console import Console
from rich.table import Table
from .metadata import FileMatchMetaData, MatchMetaData

Finding = Union[MatchMetaData, FileMatchMetaData]

def findings_table(title: str, findings: Sequence[Finding]) -> Table:
    table = Table(title=title, box=box.SIMPLE_HEAVY)
    if findings and isinstance(findings[0], FileMatchMetaData):
        table.add_column("File", style="cyan")
    else:
        table.add_column("Table", style="cyan")
        table.add_column("Column", style="cyan")
        table.add_column("Type")
    table.add_column("Model", style="magenta")
    table.add_column("Probability", justify="right")

    for f in findings:
        tail = [f.model or "-", f"{f.average_probability:.2f}"]
        if isinstance(f, FileMatchMetaData):
            table.add_row(f.path, *tail)
        else:
            table.add_row(f.table, f.column, f.column_type or "-", *tail)
    return table

def print_findings(title: str, findings: Sequence[Finding], console: Optional[Console] = None) -> None:
    console = console or Console()
    if not findings:
        console.print(f"[yellow]{title}: nothing found[/yellow]")
        return
    console.print(findings_table(title, findings))
