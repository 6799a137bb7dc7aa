"""In-process key-value medium."""

from invoiceflow.core.exceptions import StorageWriteError
from invoiceflow.core.interfaces.storage import IKeyValueMedium


class InMemoryKeyValueMedium(IKeyValueMedium):
    """
    Dict-backed medium for tests and throwaway sessions.

    ``capacity`` (total characters across all values) models a medium with a
    quota, such as browser local storage: a write that would exceed it is
    rejected and the previous value is kept.
    """

    def __init__(self, initial: dict[str, str] | None = None, capacity: int | None = None):
        self._data: dict[str, str] = dict(initial or {})
        self.capacity = capacity

    async def get(self, key: str) -> str | None:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        if self.capacity is not None:
            used = sum(len(v) for k, v in self._data.items() if k != key)
            if used + len(value) > self.capacity:
                raise StorageWriteError(key, "quota exceeded")
        self._data[key] = value

    async def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    async def keys(self) -> list[str]:
        return sorted(self._data)
