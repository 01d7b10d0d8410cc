"""Configuration management for the chart-of-accounts engine."""

import json
import os
from dataclasses import dataclass
from pathlib import Path

from coa_engine.store.base import KeyValueStore
from coa_engine.store.file import FileStore
from coa_engine.store.http import HttpStore


def _get_config_dir() -> Path:
    """Get XDG-compliant config directory."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config) / "coa-engine"
    return Path.home() / ".config" / "coa-engine"


def _get_data_dir() -> Path:
    """Get XDG-compliant data directory for the file store."""
    xdg_data = os.environ.get("XDG_DATA_HOME")
    base = Path(xdg_data) if xdg_data else Path.home() / ".local" / "share"
    return base / "coa-engine" / "store"


@dataclass(frozen=True, slots=True)
class CoaConfig:
    """Where the engine keeps its data.

    A store URL selects the remote HTTP store; otherwise files are kept
    under store_dir (default: ~/.local/share/coa-engine/store).
    """

    store_dir: Path | None = None
    store_url: str | None = None

    @property
    def resolved_store_dir(self) -> Path:
        return self.store_dir or _get_data_dir()

    def create_store(self) -> KeyValueStore:
        """Build the store adapter described by this config."""
        if self.store_url:
            return HttpStore(self.store_url)
        return FileStore(self.resolved_store_dir)

    @classmethod
    def from_env(cls) -> "CoaConfig":
        """Create config from environment variables.

        Expected env vars (at least one):
        - COA_STORE_URL
        - COA_STORE_DIR
        """
        store_url = os.environ.get("COA_STORE_URL")
        store_dir = os.environ.get("COA_STORE_DIR")

        if not store_url and not store_dir:
            msg = "Missing environment variables: COA_STORE_URL or COA_STORE_DIR"
            raise ValueError(msg)

        return cls(
            store_dir=Path(store_dir) if store_dir else None,
            store_url=store_url or None,
        )

    @classmethod
    def from_file(cls, path: Path | None = None) -> "CoaConfig":
        """Load config from JSON file.

        Default path: ~/.config/coa-engine/config.json

        Expected format:
        {
            "store_dir": "...",
            "store_url": "..."
        }
        """
        if path is None:
            path = _get_config_dir() / "config.json"

        if not path.exists():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)

        with path.open() as f:
            data = json.load(f)

        store_dir = data.get("store_dir")
        return cls(
            store_dir=Path(store_dir).expanduser() if store_dir else None,
            store_url=data.get("store_url") or None,
        )

    @classmethod
    def load(cls) -> "CoaConfig":
        """Load config from environment, then file, then defaults."""
        try:
            return cls.from_env()
        except ValueError:
            pass
        try:
            return cls.from_file()
        except FileNotFoundError:
            return cls()
