from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import typer

from student_records.config import get_settings
from student_records.controller import MenuController
from student_records.domain.errors import CorruptDataError, IoFailureError, NotFoundError
from student_records.manager import StudentManager
from student_records.reporter import print_records
from student_records.utils.logging import configure_logging

app = typer.Typer(help="Student records manager CLI.")


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"data_file={settings.data_file} | env={settings.app_env} | "
        f"log_level={settings.log_level} | save_timeout={settings.save_timeout_seconds}s "
        f"retries={settings.save_retry_attempts} fsync={settings.save_fsync}"
    )


@app.command()
def menu(
    data_file: Optional[Path] = typer.Option(
        None,
        "--data-file",
        "-f",
        help="Data file to load and save (default from settings).",
    ),
) -> None:
    """
    Run the interactive menu. Saves on exit.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)

    manager = StudentManager(data_file=data_file, settings=settings)
    loaded = manager.bootstrap()
    typer.echo(f"Loaded {loaded} students from {manager.data_file}.")
    code = MenuController(manager).run()
    raise typer.Exit(code)


@app.command(name="list")
def list_students(
    data_file: Optional[Path] = typer.Option(
        None,
        "--data-file",
        "-f",
        help="Data file to read (default from settings).",
    ),
) -> None:
    """
    Print the records stored in the data file.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)

    manager = StudentManager(data_file=data_file, settings=settings)
    try:
        manager.load_from_file()
    except NotFoundError as exc:
        typer.echo(str(exc), err=True)
    except (CorruptDataError, IoFailureError) as exc:
        typer.echo(f"Could not read data file: {exc}", err=True)
        raise typer.Exit(1)
    finally:
        manager.persistence.close(timeout=0)
    print_records(manager.list_students(), title=f"Students ({manager.data_file})")


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
