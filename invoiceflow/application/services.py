"""
Service container and factory functions for dependency injection.

Builds every repository once over a single key-value medium. Callers hold
the returned container and pass it (or its members) to whatever needs them;
nothing in the core looks repositories up globally.
"""

from dataclasses import dataclass

from invoiceflow.application.action_logger import ActionLogger
from invoiceflow.application.inventory_repository import InventoryRepository
from invoiceflow.application.invoice_numbering import (
    CounterInvoiceNumberSequence,
    ScanInvoiceNumberSequence,
)
from invoiceflow.application.invoice_repository import InvoiceRepository
from invoiceflow.application.organization_repository import OrganizationRepository
from invoiceflow.application.policies import MissingRecordPolicy
from invoiceflow.config import Settings, get_logger, get_settings
from invoiceflow.core.entities.action_log import ActionLogEntry
from invoiceflow.core.entities.inventory import InventoryItem
from invoiceflow.core.entities.invoice import Invoice
from invoiceflow.core.entities.organization import OrganizationDetails
from invoiceflow.core.interfaces.numbering import IInvoiceNumberSequence
from invoiceflow.core.interfaces.storage import IKeyValueMedium
from invoiceflow.infrastructure.storage import (
    ConnectionPool,
    InMemoryKeyValueMedium,
    PersistentStore,
    SQLiteKeyValueMedium,
)

logger = get_logger(__name__)


@dataclass
class InvoiceFlowServices:
    """Everything the presentation layer talks to."""

    settings: Settings
    medium: IKeyValueMedium
    action_logger: ActionLogger
    organization: OrganizationRepository
    inventory: InventoryRepository
    invoices: InvoiceRepository

    async def close(self) -> None:
        await self.medium.close()


def create_medium(settings: Settings) -> IKeyValueMedium:
    """Medium selected by ``settings.storage.backend``."""
    storage = settings.storage
    if storage.backend == "memory":
        return InMemoryKeyValueMedium()
    pool = ConnectionPool(
        db_path=storage.db_path,
        pool_size=storage.pool_size,
        busy_timeout=storage.busy_timeout,
    )
    return SQLiteKeyValueMedium(pool)


def create_numbering(settings: Settings, medium: IKeyValueMedium) -> IInvoiceNumberSequence:
    """Numbering strategy selected by ``settings.ledger.numbering``."""
    ledger = settings.ledger
    if ledger.numbering == "counter":
        counter_store: PersistentStore[int] = PersistentStore(
            medium, settings.storage.invoice_counter_key, int, lambda: 0
        )
        return CounterInvoiceNumberSequence(
            counter_store,
            prefix=ledger.invoice_number_prefix,
            width=ledger.invoice_number_width,
        )
    return ScanInvoiceNumberSequence(
        prefix=ledger.invoice_number_prefix,
        width=ledger.invoice_number_width,
    )


def build_services(
    settings: Settings | None = None,
    medium: IKeyValueMedium | None = None,
) -> InvoiceFlowServices:
    """
    Wire repositories over one medium.

    Args:
        settings: Optional settings override (defaults to global settings)
        medium: Optional medium override (defaults to the configured backend)

    Returns:
        Configured InvoiceFlowServices
    """
    settings = settings or get_settings()
    if medium is None:
        medium = create_medium(settings)
    keys = settings.storage
    policy = MissingRecordPolicy(settings.ledger.missing_record_policy)

    action_logger = ActionLogger(
        PersistentStore(medium, keys.action_log_key, list[ActionLogEntry], list),
        limit=settings.ledger.action_log_limit,
    )
    organization = OrganizationRepository(
        PersistentStore(medium, keys.org_details_key, OrganizationDetails | None, lambda: None),
        action_logger,
        header_color=settings.organization.invoice_header_color,
        accent_color=settings.organization.theme_accent_color,
    )
    inventory = InventoryRepository(
        PersistentStore(medium, keys.inventory_key, list[InventoryItem], list),
        action_logger,
        missing_policy=policy,
    )
    invoices = InvoiceRepository(
        PersistentStore(medium, keys.invoices_key, list[Invoice], list),
        organization,
        action_logger,
        numbering=create_numbering(settings, medium),
        missing_policy=policy,
    )

    return InvoiceFlowServices(
        settings=settings,
        medium=medium,
        action_logger=action_logger,
        organization=organization,
        inventory=inventory,
        invoices=invoices,
    )


async def open_services(
    settings: Settings | None = None,
    medium: IKeyValueMedium | None = None,
) -> InvoiceFlowServices:
    """Build the container and run the first-load bootstrap."""
    services = build_services(settings, medium)
    await services.action_logger.bootstrap()
    logger.info("services_ready", backend=services.settings.storage.backend)
    return services
