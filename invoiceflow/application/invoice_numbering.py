"""
Invoice sequence number strategies.

``ScanInvoiceNumberSequence`` recomputes the next number from the invoices
currently stored: only correct for a single writer with a fully loaded view,
and a deleted latest invoice frees its number again.
``CounterInvoiceNumberSequence`` keeps a persisted monotonic counter guarded
by the store lock, so numbers are never reused within a process.
Neither coordinates across processes.
"""

import re
from collections.abc import Iterable, Sequence

from invoiceflow.config import get_logger
from invoiceflow.core.entities.invoice import Invoice
from invoiceflow.core.interfaces.numbering import IInvoiceNumberSequence
from invoiceflow.infrastructure.storage.persistent_store import PersistentStore

logger = get_logger(__name__)

_NON_DIGITS = re.compile(r"[^0-9]")


def parse_invoice_number(invoice_number: str | None) -> int:
    """Numeric value of an invoice number; 0 if it contains no digits."""
    digits = _NON_DIGITS.sub("", invoice_number or "")
    return int(digits) if digits else 0


def format_invoice_number(value: int, prefix: str = "INV-", width: int = 4) -> str:
    """Format a sequence value, e.g. 7 -> INV-0007."""
    return f"{prefix}{value:0{width}d}"


def highest_invoice_number(invoices: Iterable[Invoice]) -> int:
    return max((parse_invoice_number(inv.invoice_number) for inv in invoices), default=0)


class ScanInvoiceNumberSequence(IInvoiceNumberSequence):
    """max(existing numbers) + 1, recomputed on every call."""

    def __init__(self, prefix: str = "INV-", width: int = 4):
        self._prefix = prefix
        self._width = width

    async def peek(self, invoices: Sequence[Invoice]) -> str:
        return format_invoice_number(highest_invoice_number(invoices) + 1, self._prefix, self._width)

    async def reserve(self, invoices: Sequence[Invoice]) -> str:
        return await self.peek(invoices)


class CounterInvoiceNumberSequence(IInvoiceNumberSequence):
    """Persisted counter of the last issued number.

    The counter never falls behind the stored invoices, so imported or legacy
    invoices with higher numbers are respected.
    """

    def __init__(
        self,
        store: PersistentStore[int],
        prefix: str = "INV-",
        width: int = 4,
    ):
        self._store = store
        self._prefix = prefix
        self._width = width

    async def _next_value(self, invoices: Sequence[Invoice]) -> int:
        counter = await self._store.read()
        return max(counter, highest_invoice_number(invoices)) + 1

    async def peek(self, invoices: Sequence[Invoice]) -> str:
        return format_invoice_number(await self._next_value(invoices), self._prefix, self._width)

    async def reserve(self, invoices: Sequence[Invoice]) -> str:
        async def advance(counter: int) -> int:
            return max(counter, highest_invoice_number(invoices)) + 1

        value = await self._store.mutate(advance)
        logger.debug("invoice_number_reserved", value=value)
        return format_invoice_number(value, self._prefix, self._width)
