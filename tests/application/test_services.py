"""Tests for service wiring."""

from invoiceflow.application.invoice_numbering import (
    CounterInvoiceNumberSequence,
    ScanInvoiceNumberSequence,
)
from invoiceflow.application.services import (
    build_services,
    create_medium,
    create_numbering,
    open_services,
)
from invoiceflow.config import Settings
from invoiceflow.config.settings import LedgerSettings, StorageSettings
from invoiceflow.infrastructure.storage import InMemoryKeyValueMedium, SQLiteKeyValueMedium


class TestFactories:
    def test_memory_medium(self, memory_settings):
        assert isinstance(create_medium(memory_settings), InMemoryKeyValueMedium)

    def test_sqlite_medium(self, sqlite_settings):
        assert isinstance(create_medium(sqlite_settings), SQLiteKeyValueMedium)

    def test_scan_numbering_by_default(self, memory_settings, medium):
        assert isinstance(create_numbering(memory_settings, medium), ScanInvoiceNumberSequence)

    def test_counter_numbering(self, medium):
        settings = Settings(
            storage=StorageSettings(backend="memory"),
            ledger=LedgerSettings(numbering="counter", invoice_number_prefix="B-"),
        )
        numbering = create_numbering(settings, medium)
        assert isinstance(numbering, CounterInvoiceNumberSequence)

    async def test_numbering_settings_reach_repository(self, medium):
        settings = Settings(
            storage=StorageSettings(backend="memory"),
            ledger=LedgerSettings(invoice_number_prefix="B-", invoice_number_width=6),
        )
        services = build_services(settings, medium)
        assert await services.invoices.get_next_invoice_number() == "B-000001"

    async def test_log_limit_reaches_logger(self, medium):
        settings = Settings(
            storage=StorageSettings(backend="memory"),
            ledger=LedgerSettings(action_log_limit=2),
        )
        services = build_services(settings, medium)
        for n in range(4):
            await services.action_logger.log_action(str(n))
        assert len(await services.action_logger.entries()) == 2


class TestOpenServices:
    async def test_bootstraps_action_log(self, memory_settings, medium):
        services = await open_services(memory_settings, medium)
        entries = await services.action_logger.entries()
        assert [e.action for e in entries] == ["Application Initialized / Loaded"]

    async def test_bootstrap_runs_once_per_store(self, memory_settings, medium):
        await open_services(memory_settings, medium)
        services = await open_services(memory_settings, medium)
        assert len(await services.action_logger.entries()) == 1


class TestSQLiteIntegration:
    async def test_full_flow(self, sqlite_services, widget, sample_draft, sample_organization):
        await sqlite_services.organization.set(sample_organization)
        item = await sqlite_services.inventory.add(widget)
        invoice = await sqlite_services.invoices.add(sample_draft)

        assert invoice.invoice_number == "INV-0001"
        assert await sqlite_services.inventory.get_by_id(item.id) == item
        actions = [e.action for e in await sqlite_services.action_logger.entries()]
        assert actions == ["Created Invoice", "Added Inventory Item", "Updated Organization Settings"]

    async def test_state_survives_reopen(self, sqlite_settings, sample_draft):
        services = await open_services(sqlite_settings)
        created = await services.invoices.add(sample_draft)
        await services.close()

        reopened = await open_services(sqlite_settings)
        try:
            assert await reopened.invoices.get_by_id(created.id) == created
            assert await reopened.invoices.get_next_invoice_number() == "INV-0002"
            actions = [e.action for e in await reopened.action_logger.entries()]
            assert actions == ["Created Invoice", "Application Initialized / Loaded"]
        finally:
            await reopened.close()
