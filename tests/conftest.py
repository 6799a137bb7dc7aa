"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest

from invoiceflow.application.services import InvoiceFlowServices, build_services
from invoiceflow.config import Settings
from invoiceflow.config.settings import LedgerSettings, StorageSettings
from invoiceflow.core.entities import (
    InvoiceDraft,
    LineItem,
    NewInventoryItem,
    OrganizationDetails,
)
from invoiceflow.infrastructure.storage import InMemoryKeyValueMedium


@pytest.fixture
def memory_settings() -> Settings:
    """Settings using the in-memory medium."""
    return Settings(storage=StorageSettings(backend="memory"))


@pytest.fixture
def sqlite_settings(tmp_path: Path) -> Settings:
    """Settings pointing at a throwaway SQLite file."""
    return Settings(
        storage=StorageSettings(backend="sqlite", data_dir=tmp_path, db_name="test.db")
    )


@pytest.fixture
def medium() -> InMemoryKeyValueMedium:
    return InMemoryKeyValueMedium()


@pytest.fixture
def services(memory_settings: Settings, medium: InMemoryKeyValueMedium) -> InvoiceFlowServices:
    """Repositories wired over a fresh in-memory medium."""
    return build_services(memory_settings, medium)


@pytest.fixture
def strict_services(medium: InMemoryKeyValueMedium) -> InvoiceFlowServices:
    """Repositories that raise on unknown ids."""
    settings = Settings(
        storage=StorageSettings(backend="memory"),
        ledger=LedgerSettings(missing_record_policy="raise"),
    )
    return build_services(settings, medium)


@pytest.fixture
async def sqlite_services(sqlite_settings: Settings) -> AsyncGenerator[InvoiceFlowServices, None]:
    """Repositories wired over a real SQLite database."""
    services = build_services(sqlite_settings)
    yield services
    await services.close()


@pytest.fixture
def widget() -> NewInventoryItem:
    return NewInventoryItem(name="Widget", price=100.0, quantity=5, cgst_rate=9, sgst_rate=9)


@pytest.fixture
def sample_organization() -> OrganizationDetails:
    return OrganizationDetails(
        company_name="Acme Traders",
        gst_number="29ABCDE1234F1Z5",
        address="12 MG Road, Bengaluru",
        contact_details="billing@acme.test",
    )


@pytest.fixture
def sample_line_items() -> list[LineItem]:
    """Two lines: 2 x 50 at 9% + 9%, and 1 x 200 untaxed."""
    return [
        LineItem(item_name="Bolt pack", quantity=2, price=50.0, cgst_rate=9, sgst_rate=9),
        LineItem(item_name="Installation", quantity=1, price=200.0),
    ]


@pytest.fixture
def sample_draft(sample_line_items: list[LineItem]) -> InvoiceDraft:
    return InvoiceDraft(
        date="2024-03-15",
        customer_name="Globex Ltd",
        customer_address="4 Park Street, Kolkata",
        line_items=sample_line_items,
        discount_amount=10.0,
    )
