"""Account commands."""

import typer

from coa_engine.cli.config import CLIConfig, OutputFormat
from coa_engine.cli.formatters import (
    format_output,
    print_account_tree,
    print_error,
    print_success,
)
from coa_engine.cli.repository_factory import get_repository
from coa_engine.cli.runner import coa_command
from coa_engine.models.accounts import Account
from coa_engine.models.tags import Tags

app = typer.Typer(no_args_is_help=True)

ACCOUNT_COLUMNS = ["id", "number", "name", "tags", "parent"]


@app.command("list")
@coa_command
def list_accounts(
    ctx: typer.Context,
    chart_id: str = typer.Argument(..., help="Chart ID."),
    tree: bool = typer.Option(
        False,
        "--tree",
        "-t",
        help="Show the account hierarchy.",
    ),
    output: OutputFormat = typer.Option(
        OutputFormat.TABLE,
        "--output",
        "-o",
        help="Output format.",
    ),
) -> None:
    """List the accounts of a chart, sorted by number."""
    config: CLIConfig = ctx.obj

    with get_repository(config) as repo:
        accounts = repo.list_accounts(chart_id)

    if tree:
        print_account_tree(accounts, title=chart_id)
        return

    format_output([a.to_wire() for a in accounts], output, title="Accounts", columns=ACCOUNT_COLUMNS)


@app.command("show")
@coa_command
def show_account(
    ctx: typer.Context,
    chart_id: str = typer.Argument(..., help="Chart ID."),
    account_id: str = typer.Argument(..., help="Account ID."),
    output: OutputFormat = typer.Option(
        OutputFormat.TABLE,
        "--output",
        "-o",
        help="Output format.",
    ),
) -> None:
    """Show a single account."""
    config: CLIConfig = ctx.obj

    with get_repository(config) as repo:
        account = repo.get_account(chart_id, account_id)

    if account is None:
        print_error(f"Account not found: {account_id}")
        raise typer.Exit(1)

    format_output([account.to_wire()], output, title="Account", columns=ACCOUNT_COLUMNS)


@app.command("save")
@coa_command
def save_account(
    ctx: typer.Context,
    chart_id: str = typer.Argument(..., help="Chart ID."),
    number: str = typer.Option("", "--number", "-n", help="Account number."),
    name: str = typer.Option(..., "--name", help="Account name."),
    tags: list[str] = typer.Option(
        [],
        "--tag",
        "-t",
        help="Tag (repeatable), e.g. balanceSheet, increaseOnDebit, retainedEarnings.",
    ),
    parent: str = typer.Option("", "--parent", "-p", help="Parent account ID."),
    account_id: str = typer.Option(
        "",
        "--id",
        help="ID of an existing account to update (number and parent are kept).",
    ),
    user: str = typer.Option("", "--user", help="Owner reference."),
) -> None:
    """Create an account, or update an existing one with --id."""
    config: CLIConfig = ctx.obj

    with get_repository(config) as repo:
        account = Account(
            id=account_id,
            number=number,
            name=name,
            tags=tags,
            parent=parent,
            user=user,
        )
        if account_id:
            existing = repo.get_account(chart_id, account_id)
            if existing is not None:
                # Omitted --tag and --user keep the stored values
                account = existing.model_copy(
                    update={
                        "name": name,
                        "tags": Tags(tags) if tags else existing.tags,
                        "user": user or existing.user,
                    }
                )
        saved = repo.save_account(chart_id, account)

    print_success(f"Saved account {saved.number} {saved.name} ({saved.id})")


@app.command("indexes")
@coa_command
def indexes(
    ctx: typer.Context,
    chart_id: str = typer.Argument(..., help="Chart ID."),
    account_ids: list[str] = typer.Argument(..., help="Account IDs to locate."),
    tags: list[str] = typer.Option(
        [],
        "--tag",
        "-t",
        help="Only match accounts carrying this tag (repeatable).",
    ),
    output: OutputFormat = typer.Option(
        OutputFormat.TABLE,
        "--output",
        "-o",
        help="Output format.",
    ),
) -> None:
    """Show the stored position of each account, or -1."""
    config: CLIConfig = ctx.obj

    with get_repository(config) as repo:
        positions = repo.indexes(chart_id, account_ids, tags)

    rows = [{"id": a, "index": i} for a, i in zip(account_ids, positions, strict=True)]
    format_output(rows, output, title="Indexes")
