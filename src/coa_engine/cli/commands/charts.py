"""Chart-of-accounts commands."""

import typer

from coa_engine.cli.config import CLIConfig, OutputFormat
from coa_engine.cli.formatters import format_output, print_error, print_success
from coa_engine.cli.repository_factory import get_repository
from coa_engine.cli.runner import coa_command
from coa_engine.models.charts import ChartOfAccounts

app = typer.Typer(no_args_is_help=True)

CHART_COLUMNS = ["id", "name", "retainedEarningsAccount", "user", "timestamp"]


@app.command("list")
@coa_command
def list_charts(
    ctx: typer.Context,
    output: OutputFormat = typer.Option(
        OutputFormat.TABLE,
        "--output",
        "-o",
        help="Output format.",
    ),
) -> None:
    """List all charts of accounts."""
    config: CLIConfig = ctx.obj

    with get_repository(config) as repo:
        charts = repo.list_charts()

    format_output([c.to_wire() for c in charts], output, title="Charts of Accounts", columns=CHART_COLUMNS)


@app.command("show")
@coa_command
def show_chart(
    ctx: typer.Context,
    chart_id: str = typer.Argument(..., help="Chart ID."),
    output: OutputFormat = typer.Option(
        OutputFormat.TABLE,
        "--output",
        "-o",
        help="Output format.",
    ),
) -> None:
    """Show a single chart of accounts."""
    config: CLIConfig = ctx.obj

    with get_repository(config) as repo:
        chart = repo.get_chart(chart_id)

    if chart is None:
        print_error(f"Chart of accounts not found: {chart_id}")
        raise typer.Exit(1)

    format_output([chart.to_wire()], output, title="Chart of Accounts", columns=CHART_COLUMNS)


@app.command("save")
@coa_command
def save_chart(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Chart name."),
    chart_id: str = typer.Option(
        "",
        "--id",
        help="ID of an existing chart to rename.",
    ),
    user: str = typer.Option(
        "",
        "--user",
        help="Owner reference.",
    ),
) -> None:
    """Create a chart, or rename an existing one with --id."""
    config: CLIConfig = ctx.obj

    with get_repository(config) as repo:
        chart = ChartOfAccounts(id=chart_id, name=name, user=user)
        if chart_id:
            existing = repo.get_chart(chart_id)
            if existing is not None:
                chart = existing.model_copy(update={"name": name, "user": user or existing.user})
        saved = repo.save_chart(chart)

    print_success(f"Saved chart {saved.name} ({saved.id})")
