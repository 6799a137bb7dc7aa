"""Core interfaces (ports) for dependency injection."""

from invoiceflow.core.interfaces.numbering import IInvoiceNumberSequence
from invoiceflow.core.interfaces.storage import IKeyValueMedium

__all__ = [
    "IKeyValueMedium",
    "IInvoiceNumberSequence",
]
