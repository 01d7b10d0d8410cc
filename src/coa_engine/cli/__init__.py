"""Chart-of-accounts CLI."""

from coa_engine.cli.app import app

# Import command modules to register them with the app
from coa_engine.cli.commands import accounts, charts

# Register sub-apps
app.add_typer(charts.app, name="charts", help="Chart-of-accounts management.")
app.add_typer(accounts.app, name="accounts", help="Account management.")


def main() -> None:
    """Entry point for the CLI."""
    app()


__all__ = ["app", "main"]
