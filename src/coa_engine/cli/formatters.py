"""Output formatters for CLI commands."""

import csv
import io
import json
from collections.abc import Sequence
from typing import Any

from rich.console import Console
from rich.table import Table
from rich.tree import Tree

from coa_engine.cli.config import OutputFormat
from coa_engine.models.accounts import Account

console = Console()
error_console = Console(stderr=True)


def format_output(
    data: Sequence[dict[str, Any]],
    output_format: OutputFormat,
    *,
    title: str | None = None,
    columns: list[str] | None = None,
) -> None:
    """Format and print rows in the specified format.

    Args:
        data: Rows to print (wire-encoded entities)
        output_format: Output format (table, json, csv)
        title: Optional title for table output
        columns: Optional column names to include (for table/csv)
    """
    rows = [_flatten(row) for row in data]

    if output_format == OutputFormat.JSON:
        _format_json(list(data))
    elif output_format == OutputFormat.CSV:
        _format_csv(rows, columns)
    else:
        _format_table(rows, title, columns)


def _flatten(row: dict[str, Any]) -> dict[str, Any]:
    """Join list values (tags) so they fit in one cell."""
    return {k: ", ".join(v) if isinstance(v, list) else v for k, v in row.items()}


def _format_json(data: list[dict[str, Any]]) -> None:
    """Format as JSON."""
    if len(data) == 1:
        console.print_json(json.dumps(data[0], default=str))
    else:
        console.print_json(json.dumps(data, default=str))


def _format_csv(data: list[dict[str, Any]], columns: list[str] | None) -> None:
    """Format as CSV."""
    if not data:
        return

    if columns is None:
        columns = list(data[0].keys())

    output = io.StringIO()
    writer = csv.DictWriter(output, fieldnames=columns, extrasaction="ignore")
    writer.writeheader()
    writer.writerows(data)
    console.print(output.getvalue(), end="")


def _camel_to_title(s: str) -> str:
    """Convert camelCase to Title Case for table headers."""
    words: list[str] = []
    for ch in s:
        if ch.isupper() and words:
            words.append(" ")
        words.append(ch)
    return "".join(words).title()


def _format_table(
    data: list[dict[str, Any]],
    title: str | None,
    columns: list[str] | None,
) -> None:
    """Format as rich table."""
    if not data:
        console.print("[dim]No data[/dim]")
        return

    if columns is None:
        columns = list(data[0].keys())

    table = Table(title=title, show_header=True, header_style="bold")

    for col in columns:
        table.add_column(_camel_to_title(col))

    for row in data:
        table.add_row(*[str(row.get(col, "") or "") for col in columns])

    console.print(table)


def print_account_tree(accounts: Sequence[Account], *, title: str) -> None:
    """Print accounts as a hierarchy, children under their parent."""
    root = Tree(f"[bold]{title}[/bold]")
    children: dict[str, list[Account]] = {}
    for account in accounts:
        children.setdefault(account.parent, []).append(account)

    def add(node: Tree, parent_id: str, seen: set[str]) -> None:
        for account in children.get(parent_id, []):
            if account.id in seen:
                continue
            label = f"[cyan]{account.number}[/cyan] {account.name} [dim]{', '.join(account.tags)}[/dim]"
            add(node.add(label), account.id, seen | {account.id})

    add(root, "", set())
    console.print(root)


def print_error(message: str) -> None:
    """Print an error message to stderr."""
    error_console.print(f"[red]Error:[/red] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]✓[/green] {message}")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]i[/blue] {message}")
