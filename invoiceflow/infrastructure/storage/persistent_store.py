"""
Typed view over one key of the durable key-value medium.

The value is read from the medium once and cached. Writes serialize the whole
value and go to the medium first; the cache is swapped only after the medium
accepted the write, so a rejected write leaves both at the previous value.

Read-modify-write cycles go through ``mutate``, which holds the store's lock
for the whole cycle so coroutines of one process never overwrite each other.
"""

import asyncio
import copy
import json
from collections.abc import Awaitable, Callable
from typing import Any, Generic, TypeVar, get_args, get_origin

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from invoiceflow.config import get_logger
from invoiceflow.core.interfaces.storage import IKeyValueMedium

logger = get_logger(__name__)

T = TypeVar("T")

UNREADABLE_SUFFIX = "_unreadable"


class PersistentStore(Generic[T]):
    """
    Read/write one JSON value stored under ``key``.

    Unparsable or wrongly shaped stored data never raises:

    - list values keep every element that validates and skip the rest;
    - anything else reads as the default value.

    Either way the raw payload is copied to ``<key>_unreadable`` before the
    next write replaces it, so nothing the store could not read is lost.
    Callers always receive deep copies and cannot mutate the cache.
    """

    def __init__(
        self,
        medium: IKeyValueMedium,
        key: str,
        value_type: Any,
        default_factory: Callable[[], T],
    ):
        self._medium = medium
        self._key = key
        self._adapter: TypeAdapter[T] = TypeAdapter(value_type)
        self._item_adapter: TypeAdapter[Any] | None = None
        if get_origin(value_type) is list:
            self._item_adapter = TypeAdapter(get_args(value_type)[0])
        self._default_factory = default_factory
        self._value: T | None = None
        self._loaded = False
        self._unreadable_raw: str | None = None
        self._lock = asyncio.Lock()

    @property
    def key(self) -> str:
        return self._key

    @property
    def quarantine_key(self) -> str:
        return f"{self._key}{UNREADABLE_SUFFIX}"

    async def read(self) -> T:
        """Current value, loading it from the medium on first use."""
        return copy.deepcopy(await self._current())

    async def reload(self) -> T:
        """Drop the cache and read the medium again."""
        async with self._lock:
            self._loaded = False
            return copy.deepcopy(await self._current())

    async def write(self, value: T) -> None:
        """
        Serialize and overwrite the stored value.

        Raises:
            StorageWriteError: If the medium rejects the write
        """
        async with self._lock:
            await self._write(value)

    async def mutate(self, fn: Callable[[T], Awaitable[T]]) -> T:
        """
        Read, transform and write under the store lock.

        ``fn`` receives a private copy of the current value and returns the
        value to store. Returning the argument itself skips the write; an
        exception raised by ``fn`` aborts without writing.

        Returns:
            The value now stored (a copy)
        """
        async with self._lock:
            current = copy.deepcopy(await self._current())
            updated = await fn(current)
            if updated is not current:
                await self._write(updated)
            return copy.deepcopy(updated)

    async def reset(self) -> bool:
        """Delete the stored value; the next read yields the default."""
        async with self._lock:
            removed = await self._medium.delete(self._key)
            self._value = None
            self._loaded = False
            self._unreadable_raw = None
            return removed

    async def _current(self) -> T:
        if not self._loaded:
            raw = await self._medium.get(self._key)
            self._value = self._decode(raw)
            self._loaded = True
        return self._value  # type: ignore[return-value]

    async def _write(self, value: T) -> None:
        payload = self._adapter.dump_json(value, by_alias=True).decode("utf-8")
        if self._unreadable_raw is not None:
            await self._medium.set(self.quarantine_key, self._unreadable_raw)
            logger.warning("stored_value_quarantined", key=self._key, to=self.quarantine_key)
            self._unreadable_raw = None
        await self._medium.set(self._key, payload)
        self._value = copy.deepcopy(value)
        self._loaded = True

    def _decode(self, raw: str | None) -> T:
        if raw is None:
            return self._default_factory()
        try:
            return self._adapter.validate_json(raw)
        except PydanticValidationError as e:
            logger.warning(
                "stored_value_unreadable",
                key=self._key,
                error_count=e.error_count(),
                first_error=e.errors()[0]["msg"] if e.error_count() else None,
            )
        self._unreadable_raw = raw
        return self._salvage(raw)

    def _salvage(self, raw: str) -> T:
        if self._item_adapter is None:
            return self._default_factory()
        try:
            elements = json.loads(raw)
        except ValueError:
            return self._default_factory()
        if not isinstance(elements, list):
            return self._default_factory()

        kept = []
        skipped = []
        for index, element in enumerate(elements):
            try:
                kept.append(self._item_adapter.validate_python(element))
            except PydanticValidationError:
                skipped.append(index)
        logger.warning("stored_records_skipped", key=self._key, skipped=skipped, kept=len(kept))
        return kept  # type: ignore[return-value]
