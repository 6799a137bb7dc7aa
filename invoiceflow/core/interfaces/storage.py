"""Abstract interface for the durable key-value medium."""

from abc import ABC, abstractmethod


class IKeyValueMedium(ABC):
    """
    Durable string-valued key-value storage.

    Each ``set`` must be durable once it returns; there is no write buffering.
    Implementations raise ``StorageWriteError`` when a write is rejected and
    leave the previous value in place.
    """

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Get the raw value for a key, or None if absent."""
        pass

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Overwrite the value for a key."""
        pass

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Remove a key. Returns True if it existed."""
        pass

    @abstractmethod
    async def keys(self) -> list[str]:
        """List stored keys."""
        pass

    async def close(self) -> None:
        """Release any held resources."""
        return None
