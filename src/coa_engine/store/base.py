"""Storage adapter contract."""

from abc import ABC, abstractmethod


class KeyValueStore(ABC):
    """Byte-oriented key-value store used as the sole persistence primitive.

    Implementations must make each single-key get/put atomic. No
    transactional or compare-and-swap primitive is assumed.
    """

    @abstractmethod
    def get(self, key: str) -> bytes | None:
        """Return the bytes stored under key, or None if the key is unset.

        Raises:
            CoaStoreError: If the adapter fails
        """

    @abstractmethod
    def put(self, key: str, data: bytes) -> None:
        """Replace the bytes stored under key.

        Raises:
            CoaStoreError: If the adapter fails
        """
