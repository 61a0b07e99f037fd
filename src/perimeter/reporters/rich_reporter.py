from typing import Iterable, Optional

from rich.console import Console
from rich.table import Table

from perimeter.api.results import Violation
from perimeter.errors import SUMMARY_TEMPLATE

console = Console()


def report_success(msg: str, out: Optional[Console] = None):
    (out or console).print(f"[bold green]✅ {msg}[/bold green]")


def report_failure(msg: str, out: Optional[Console] = None):
    (out or console).print(f"[bold red]❌ {msg}[/bold red]")


def render_violations(violations: Iterable[Violation], out: Optional[Console] = None) -> None:
    """Print the failure summary and a table of violations."""
    items = list(violations)
    out = out or console
    report_failure(SUMMARY_TEMPLATE.format(count=len(items)), out)

    table = Table(show_header=True, header_style="bold")
    table.add_column("Path", style="cyan")
    table.add_column("Field", style="magenta")
    table.add_column("Error")
    for v in items:
        table.add_row(".".join(v.path) or "-", v.field, v.error)
    out.print(table)
