"""
Terminal output for profkit commands.

Status lines go to stdout, errors to stderr so that `--dry-run` JSON and
tables can be piped without the noise.
"""

from typing import Iterable, List, Optional, Sequence

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

console = Console()
err_console = Console(stderr=True)

_STATUS = {
    "success": ("✔ ", "bold green"),
    "warning": ("⚠  ", "bold yellow"),
    "info": ("", "cyan"),
}


def _status(kind: str, message: str) -> None:
    prefix, style = _STATUS[kind]
    console.print(f"{prefix}{message}", style=style)


def success(message: str):
    _status("success", message)


def warning(message: str):
    _status("warning", message)


def info(message: str):
    _status("info", message)


def error(message: str):
    err_console.print(f"✖ {message}", style="bold red")


def create_table(
    title: str, columns: List[str], rows: Optional[Iterable[Sequence[str]]] = None
) -> Table:
    """Table with a magenta header row, optionally filled with rows of strings"""
    table = Table(title=title, show_header=True, header_style="bold magenta")
    for column in columns:
        table.add_column(column)
    for row in rows or ():
        table.add_row(*row)
    return table


def display_panel(content: str, title: str, style: str = "blue"):
    console.print(Panel(content, title=title, border_style=style))


class ConsoleResponse:
    """
    Output channel handed to auth handlers.

    Messages are printed verbatim (tokens may contain brackets rich would
    read as markup) and kept in ``messages``.
    """

    def __init__(self, target: Optional[Console] = None):
        self.target = target or console
        self.messages: List[str] = []

    def log(self, message: str) -> None:
        self.messages.append(message)
        self.target.print(message, markup=False, highlight=False)
