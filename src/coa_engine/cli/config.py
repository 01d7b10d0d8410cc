"""CLI configuration passed through the Typer context."""

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

from coa_engine.config import CoaConfig


class OutputFormat(StrEnum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"
    CSV = "csv"


@dataclass
class CLIConfig:
    """Configuration passed through Typer context.

    Attributes:
        verbose: Enable debug logging.
        store_dir: Override for the file store directory.
        store_url: Override for the remote store URL.

    Command-line values take precedence over COA_STORE_DIR / COA_STORE_URL
    and the config file.
    """

    verbose: bool = False
    store_dir: Path | None = None
    store_url: str | None = None

    def engine_config(self) -> CoaConfig:
        """Resolve the engine config, applying command-line overrides."""
        if self.store_dir or self.store_url:
            return CoaConfig(store_dir=self.store_dir, store_url=self.store_url)
        return CoaConfig.load()
