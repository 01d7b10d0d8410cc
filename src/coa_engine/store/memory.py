"""In-process store, mainly for tests and scratch work."""

from coa_engine.store.base import KeyValueStore


class MemoryStore(KeyValueStore):
    """Dict-backed store. Values are copied in and out."""

    def __init__(self, initial: dict[str, bytes] | None = None) -> None:
        self._data: dict[str, bytes] = dict(initial or {})

    def get(self, key: str) -> bytes | None:
        value = self._data.get(key)
        return bytes(value) if value is not None else None

    def put(self, key: str, data: bytes) -> None:
        self._data[key] = bytes(data)

    def keys(self) -> list[str]:
        return sorted(self._data)

    def __len__(self) -> int:
        return len(self._data)
