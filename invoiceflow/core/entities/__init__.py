"""Core domain entities."""

from invoiceflow.core.entities.action_log import (
    ActionLogEntry,
    InventoryItemLogDetails,
    InvoiceLogDetails,
    OrganizationLogDetails,
)
from invoiceflow.core.entities.inventory import InventoryItem, NewInventoryItem
from invoiceflow.core.entities.invoice import (
    Invoice,
    InvoiceDraft,
    InvoiceStatus,
    LineItem,
)
from invoiceflow.core.entities.organization import (
    DEFAULT_INVOICE_HEADER_COLOR,
    DEFAULT_THEME_ACCENT_COLOR,
    OrganizationDetails,
)

__all__ = [
    # Organization entities
    "OrganizationDetails",
    "DEFAULT_INVOICE_HEADER_COLOR",
    "DEFAULT_THEME_ACCENT_COLOR",
    # Inventory entities
    "InventoryItem",
    "NewInventoryItem",
    # Invoice entities
    "Invoice",
    "InvoiceDraft",
    "InvoiceStatus",
    "LineItem",
    # Action log entities
    "ActionLogEntry",
    "InventoryItemLogDetails",
    "InvoiceLogDetails",
    "OrganizationLogDetails",
]
