"""Tests for the bounded action log."""

import asyncio
import json

from invoiceflow.application import INITIALIZED_ACTION, ActionLogger
from invoiceflow.core.entities import ActionLogEntry, InventoryItemLogDetails
from invoiceflow.infrastructure.storage import InMemoryKeyValueMedium, PersistentStore


def make_logger(medium, limit=100):
    store = PersistentStore(medium, "log", list[ActionLogEntry], list)
    return ActionLogger(store, limit=limit)


class TestLogAction:
    async def test_prepends_entries(self, medium):
        logger = make_logger(medium)
        await logger.log_action("first")
        await logger.log_action("second")

        entries = await logger.entries()
        assert [e.action for e in entries] == ["second", "first"]

    async def test_returns_the_new_entry(self, medium):
        logger = make_logger(medium)
        entry = await logger.log_action("Added Inventory Item", {"name": "Bolt"})
        assert (await logger.entries())[0].id == entry.id
        assert entry.details == {"name": "Bolt"}

    async def test_entries_get_unique_ids(self, medium):
        logger = make_logger(medium)
        for _ in range(5):
            await logger.log_action("tick")
        ids = {e.id for e in await logger.entries()}
        assert len(ids) == 5

    async def test_never_exceeds_limit(self, medium):
        logger = make_logger(medium)
        for n in range(150):
            await logger.log_action(f"event {n}")

        entries = await logger.entries()
        assert len(entries) == 100
        assert [e.action for e in entries] == [f"event {n}" for n in range(149, 49, -1)]

    async def test_custom_limit(self, medium):
        logger = make_logger(medium, limit=3)
        for n in range(5):
            await logger.log_action(str(n))
        assert [e.action for e in await logger.entries()] == ["4", "3", "2"]

    async def test_persists_typed_details(self, medium):
        logger = make_logger(medium)
        await logger.log_action("Added Inventory Item", InventoryItemLogDetails(id="a", name="Bolt"))

        stored = json.loads(await medium.get("log"))
        assert stored[0]["details"] == {"kind": "inventory_item", "id": "a", "name": "Bolt"}

        reloaded = await make_logger(medium).entries()
        assert isinstance(reloaded[0].details, InventoryItemLogDetails)


class TestBootstrap:
    async def test_logs_once_when_empty(self, medium):
        logger = make_logger(medium)
        entry = await logger.bootstrap()
        assert entry is not None
        assert entry.action == INITIALIZED_ACTION

        assert await logger.bootstrap() is None
        assert len(await logger.entries()) == 1

    async def test_skipped_when_log_exists(self):
        medium = InMemoryKeyValueMedium()
        await make_logger(medium).log_action("earlier session")

        assert await make_logger(medium).bootstrap() is None
        entries = await make_logger(medium).entries()
        assert [e.action for e in entries] == ["earlier session"]


class TestClear:
    async def test_removes_all_entries(self, medium):
        logger = make_logger(medium)
        await logger.log_action("one")

        assert await logger.clear() is True
        assert await logger.entries() == []
        assert await medium.get("log") is None

    async def test_clear_on_empty_log(self, medium):
        assert await make_logger(medium).clear() is False


class TestConcurrency:
    async def test_concurrent_entries_on_sqlite(self, sqlite_services):
        logger = sqlite_services.action_logger
        await asyncio.gather(*(logger.log_action(f"event {n}") for n in range(10)))

        entries = await logger.entries()
        assert sorted(e.action for e in entries) == sorted(f"event {n}" for n in range(10))
        assert len(json.loads(await sqlite_services.medium.get("invoiceflow_action_log"))) == 10

    async def test_concurrent_bootstrap_logs_once(self, medium):
        logger = make_logger(medium)
        results = await asyncio.gather(logger.bootstrap(), logger.bootstrap())

        assert sum(entry is not None for entry in results) == 1
        assert len(await logger.entries()) == 1
