"""
Seed data generator for the student records manager.

Produces a deterministic pseudo-random set of students and writes it through
the regular persistence adapter, so the result is a valid data file.
"""

from __future__ import annotations

import random
import sys
import time
from pathlib import Path

import typer

from student_records.domain.models import Record
from student_records.persistence.adapter import PersistenceAdapter, SaveResult
from student_records.store import RecordStore

app = typer.Typer(help="Generate a synthetic student records data file.")

FIRST_NAMES = [
    "Alice", "Bob", "Chen", "Dana", "Emeka", "Fatima", "Goran", "Hana",
    "Ivan", "Jia", "Kofi", "Lena", "Mateo", "Nadia", "Omar", "Priya",
]
LAST_NAMES = [
    "Smith", "Okafor", "Kowalski", "Tanaka", "Haddad", "Silva", "Novak", "Reyes",
]


def _generate_records(rows: int, seed: int, start_id: int = 1) -> list[Record]:
    rng = random.Random(seed)
    records: list[Record] = []
    for offset in range(rows):
        name = f"{rng.choice(FIRST_NAMES)} {rng.choice(LAST_NAMES)}"
        marks = round(rng.uniform(0, 100), 2)
        records.append(Record(id=start_id + offset, name=name, marks=marks))
    return records


def _write_data_file(path: Path, records: list[Record]) -> SaveResult:
    adapter = PersistenceAdapter(RecordStore(records), default_path=path)
    try:
        return adapter.save().result()
    finally:
        adapter.close()


@app.command()
def main(
    rows: int = typer.Option(
        100,
        "--rows",
        "-r",
        min=0,
        help="Number of students to generate.",
    ),
    seed: int = typer.Option(
        42,
        "--seed",
        help="Deterministic RNG seed.",
    ),
    start_id: int = typer.Option(
        1,
        "--start-id",
        min=1,
        help="Id of the first generated student.",
    ),
    output: Path = typer.Option(
        Path("students.json"),
        "--output",
        "-o",
        help="Data file to write (replaced atomically).",
    ),
) -> None:
    """
    Generate synthetic students and write them to a data file.
    """
    start = time.perf_counter()
    typer.echo(f"Generating {rows:,} students -> {output} (seed={seed})")
    records = _generate_records(rows, seed=seed, start_id=start_id)
    result = _write_data_file(output, records)
    if result.get("error"):
        typer.echo(f"Write failed: {result['error']}", err=True)
        raise typer.Exit(1)
    duration = time.perf_counter() - start
    typer.echo(f"Wrote {result['bytes_written']:,} bytes in {duration:.2f}s.")


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)
