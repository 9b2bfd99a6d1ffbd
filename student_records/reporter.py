from __future__ import annotations

from typing import Optional, Sequence

from rich import box
from rich.console import Console
from rich.table import Table

from student_records.domain.models import Record


def build_records_table(records: Sequence[Record], title: str = "Students") -> Table:
    """
    Build a rich table with one row per record, in store order.
    """
    marks_values = [record.marks for record in records]
    caption = None
    if marks_values:
        average = sum(marks_values) / len(marks_values)
        caption = f"{len(records)} student(s) │ average marks {average:.2f}"

    table = Table(title=title, box=box.ROUNDED, caption=caption)
    table.add_column("ID", justify="right", style="cyan", no_wrap=True)
    table.add_column("Name", style="magenta")
    table.add_column("Marks", justify="right", style="green")

    for record in records:
        table.add_row(str(record.id), record.name, f"{record.marks:.2f}")
    return table


def print_records(
    records: Sequence[Record],
    console: Optional[Console] = None,
    title: str = "Students",
) -> None:
    """
    Render records as a rich table, or a short notice when there are none.
    """
    console = console or Console()

    if not records:
        console.print("[yellow]No students currently.[/yellow]")
        return

    console.print(build_records_table(records, title=title))


__all__ = ["build_records_table", "print_records"]
