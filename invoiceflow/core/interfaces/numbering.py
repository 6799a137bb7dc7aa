"""Abstract interface for invoice sequence numbers."""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from invoiceflow.core.entities.invoice import Invoice


class IInvoiceNumberSequence(ABC):
    """Produces the human-facing invoice number for the next invoice."""

    @abstractmethod
    async def peek(self, invoices: Sequence[Invoice]) -> str:
        """Return the next number without claiming it."""
        pass

    @abstractmethod
    async def reserve(self, invoices: Sequence[Invoice]) -> str:
        """Claim and return the next number for a new invoice."""
        pass
