"""Repository factory for CLI commands."""

from collections.abc import Generator
from contextlib import contextmanager
from typing import TYPE_CHECKING

from coa_engine.repository import CoaRepository
from coa_engine.store.http import HttpStore

if TYPE_CHECKING:
    from coa_engine.cli.config import CLIConfig


@contextmanager
def get_repository(config: "CLIConfig") -> Generator[CoaRepository]:
    """Create a CoaRepository for CLI use.

    The HTTP store, when configured, is opened for connection pooling
    and closed on exit.

    Usage:
        with get_repository(cli_config) as repo:
            charts = repo.list_charts()
    """
    store = config.engine_config().create_store()

    if isinstance(store, HttpStore):
        with store:
            yield CoaRepository(store)
    else:
        yield CoaRepository(store)
