"""
Application layer - repositories and service wiring.

Repositories own the persisted entities and their invariants; the service
container wires them over one key-value medium.
"""

from invoiceflow.application.action_logger import INITIALIZED_ACTION, ActionLogger
from invoiceflow.application.inventory_repository import InventoryRepository
from invoiceflow.application.invoice_numbering import (
    CounterInvoiceNumberSequence,
    ScanInvoiceNumberSequence,
    format_invoice_number,
    parse_invoice_number,
)
from invoiceflow.application.invoice_repository import InvoiceRepository
from invoiceflow.application.organization_repository import OrganizationRepository
from invoiceflow.application.policies import MissingRecordPolicy
from invoiceflow.application.services import (
    InvoiceFlowServices,
    build_services,
    open_services,
)

__all__ = [
    "ActionLogger",
    "INITIALIZED_ACTION",
    "OrganizationRepository",
    "InventoryRepository",
    "InvoiceRepository",
    "ScanInvoiceNumberSequence",
    "CounterInvoiceNumberSequence",
    "format_invoice_number",
    "parse_invoice_number",
    "MissingRecordPolicy",
    "InvoiceFlowServices",
    "build_services",
    "open_services",
]
