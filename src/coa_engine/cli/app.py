"""Main Typer application."""

import logging
from pathlib import Path

import typer
from rich.logging import RichHandler

from coa_engine.cli.config import CLIConfig

# Create main app
app = typer.Typer(
    name="coa",
    help="Chart-of-accounts command-line interface.",
    no_args_is_help=True,
)


@app.callback()
def main(
    ctx: typer.Context,
    store_dir: Path | None = typer.Option(
        None,
        "--store-dir",
        "-d",
        help="File store directory (default: ~/.local/share/coa-engine/store).",
        envvar="COA_STORE_DIR",
    ),
    store_url: str | None = typer.Option(
        None,
        "--store-url",
        "-u",
        help="Base URL of a remote blob store.",
        envvar="COA_STORE_URL",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging.",
    ),
) -> None:
    """Manage charts of accounts and their account hierarchies."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(show_path=False)],
        )
    ctx.obj = CLIConfig(
        verbose=verbose,
        store_dir=store_dir,
        store_url=store_url,
    )
