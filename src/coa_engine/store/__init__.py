"""Storage adapters."""

from coa_engine.store.base import KeyValueStore
from coa_engine.store.file import FileStore
from coa_engine.store.http import HttpStore
from coa_engine.store.memory import MemoryStore

__all__ = ["FileStore", "HttpStore", "KeyValueStore", "MemoryStore"]
