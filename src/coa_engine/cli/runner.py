"""Error handling for Typer commands."""

from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar

import typer

from coa_engine.exceptions import CoaError, CoaStoreError

T = TypeVar("T")


def coa_command(f: Callable[..., T]) -> Callable[..., T]:
    """Decorator turning engine errors into a printed message and exit code 1.

    Usage:
        @app.command()
        @coa_command
        def my_command(ctx: typer.Context):
            with get_repository(ctx.obj) as repo:
                ...
    """

    @wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> T:
        from coa_engine.cli.formatters import print_error

        try:
            return f(*args, **kwargs)
        except CoaStoreError as e:
            print_error(f"Storage failure: {e.message}")
            raise typer.Exit(1) from e
        except CoaError as e:
            print_error(e.message)
            raise typer.Exit(1) from e

    return wrapper
