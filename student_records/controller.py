"""
Interactive menu controller.

Reads one command per line, dispatches to the StudentManager, and prints
results. Errors are reported and the loop continues; only `0` (or end of
input) leaves the loop, after a final save.
"""

from __future__ import annotations

import sys
from typing import Callable, Dict, Optional

import typer
from rich.console import Console

from student_records.domain.errors import (
    CorruptDataError,
    InvalidInputError,
    IoFailureError,
    NotFoundError,
)
from student_records.manager import StudentManager
from student_records.reporter import print_records

MENU = "\n".join(
    [
        "",
        "=== Student Management System ===",
        "1. Add Student",
        "2. List Students",
        "3. Find Student by ID",
        "4. Remove Student by ID",
        "5. Save (background)",
        "6. Load from file",
        "0. Exit",
    ]
)


def _ask(text: str) -> str:
    """Prompt for one line of input; raises EOFError once stdin is exhausted."""
    typer.echo(f"{text}: ", nl=False)
    line = sys.stdin.readline()
    if not line:
        raise EOFError
    return line.rstrip("\r\n")


class MenuController:
    """
    Numbered-menu front end over a StudentManager.
    """

    def __init__(
        self,
        manager: StudentManager,
        ask: Callable[[str], str] = _ask,
        console: Optional[Console] = None,
        shutdown_timeout: Optional[float] = None,
    ) -> None:
        self.manager = manager
        self._ask = ask
        self._console = console
        self._shutdown_timeout = shutdown_timeout
        self._handlers: Dict[str, Callable[[], None]] = {
            "1": self.handle_add,
            "2": self.handle_list,
            "3": self.handle_find,
            "4": self.handle_remove,
            "5": self.handle_save,
            "6": self.handle_load,
        }

    def run(self) -> int:
        """Loop until the exit command; always returns exit code 0."""
        while True:
            typer.echo(MENU)
            try:
                choice = self._ask("Choose an option").strip()
            except EOFError:
                typer.echo()
                choice = "0"

            if choice == "0":
                self.handle_exit()
                return 0

            handler = self._handlers.get(choice)
            if handler is None:
                typer.echo("Invalid choice. Try again.")
                continue
            try:
                handler()
            except EOFError:
                typer.echo()
                self.handle_exit()
                return 0

    def handle_add(self) -> None:
        typer.echo("--- Add Student ---")
        try:
            record_id = self._ask("Enter ID")
            name = self._ask("Enter name")
            marks = self._ask("Enter marks (0-100)")
            self.manager.add_student(record_id, name, marks)
            typer.echo("Student added successfully.")
        except InvalidInputError as exc:
            typer.echo(f"Failed to add student: {exc}", err=True)
        finally:
            typer.echo("Returning to main menu.")

    def handle_list(self) -> None:
        typer.echo("--- Student List ---")
        print_records(self.manager.list_students(), console=self._console)

    def handle_find(self) -> None:
        try:
            record = self.manager.find_student(self._ask("Enter ID to find"))
            typer.echo(f"Found: {record}")
        except InvalidInputError:
            typer.echo("Invalid ID format.", err=True)
        except NotFoundError as exc:
            typer.echo(str(exc), err=True)
        finally:
            typer.echo("Returning to main menu.")

    def handle_remove(self) -> None:
        try:
            self.manager.remove_student(self._ask("Enter ID to remove"))
            typer.echo("Student removed.")
        except InvalidInputError:
            typer.echo("Invalid ID format.", err=True)
        except NotFoundError as exc:
            typer.echo(str(exc), err=True)
        finally:
            typer.echo("Returning to main menu.")

    def handle_save(self) -> None:
        self.manager.save_in_background()
        typer.echo("Save started in background (you may continue).")

    def handle_load(self) -> None:
        typer.echo("[Load] Loading data from file...")
        try:
            count = self.manager.load_from_file()
        except NotFoundError:
            typer.echo("[Load] File not found, keeping current dataset.", err=True)
        except (CorruptDataError, IoFailureError) as exc:
            typer.echo(f"[Load] Error during load: {exc}", err=True)
        else:
            typer.echo(f"[Load] Completed. Loaded {count} students.")

    def handle_exit(self) -> None:
        typer.echo("Exiting... saving data before exit.")
        result = self.manager.shutdown(timeout=self._shutdown_timeout)
        if result is None:
            typer.echo("Final save did not complete in time.", err=True)
        elif result.get("error"):
            typer.echo(f"Final save failed: {result['error']}", err=True)
        else:
            typer.echo(f"[Save] Completed. Data written to: {result['path']}")
        typer.echo("Goodbye.")


__all__ = ["MENU", "MenuController"]
