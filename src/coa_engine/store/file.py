"""Filesystem store: one file per key."""

import logging
import os
import tempfile
from pathlib import Path

from coa_engine.exceptions import CoaStoreError
from coa_engine.store.base import KeyValueStore

logger = logging.getLogger(__name__)


class FileStore(KeyValueStore):
    """Store each key as a file under a root directory.

    Keys with "/" map to sub-directories, so "accounts/abc" lives at
    ``root/accounts/abc``. Writes go to a temporary file in the same
    directory and are moved into place with ``os.replace``.
    """

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    def _path_for(self, key: str, operation: str) -> Path:
        parts = key.split("/")
        if not key or any(p in ("", ".", "..") for p in parts):
            raise CoaStoreError(f"Invalid key: {key!r}", key=key, operation=operation)
        return self.root.joinpath(*parts)

    def get(self, key: str) -> bytes | None:
        path = self._path_for(key, "get")
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise CoaStoreError(f"Failed to read {path}: {e}", key=key, operation="get") from e

    def put(self, key: str, data: bytes) -> None:
        path = self._path_for(key, "put")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "wb") as f:
                    f.write(data)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise CoaStoreError(f"Failed to write {path}: {e}", key=key, operation="put") from e
        logger.debug("Wrote %d bytes to %s", len(data), path)
