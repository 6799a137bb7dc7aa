"""CRUD over invoices, including numbering and organization snapshots."""

from collections.abc import Callable
from typing import TypeVar

from invoiceflow.application.action_logger import ActionLogger
from invoiceflow.application.invoice_numbering import ScanInvoiceNumberSequence
from invoiceflow.application.organization_repository import OrganizationRepository
from invoiceflow.application.policies import MissingRecordPolicy
from invoiceflow.config import get_logger
from invoiceflow.core.entities.action_log import InvoiceLogDetails
from invoiceflow.core.entities.base import new_id
from invoiceflow.core.entities.invoice import Invoice, InvoiceDraft, InvoiceStatus
from invoiceflow.core.exceptions import InvoiceNotFoundError
from invoiceflow.core.interfaces.numbering import IInvoiceNumberSequence
from invoiceflow.core.services.invoice_calculator import compute_totals
from invoiceflow.infrastructure.storage.persistent_store import PersistentStore

logger = get_logger(__name__)

DraftT = TypeVar("DraftT", bound=InvoiceDraft)


class InvoiceRepository:
    """
    Owns the invoice collection.

    ``add`` assigns the id and sequence number and embeds a copy of the
    organization profile, so later profile edits never change old invoices.
    Totals supplied by the caller are kept; omitted ones are computed.
    """

    def __init__(
        self,
        store: PersistentStore[list[Invoice]],
        organization_repository: OrganizationRepository,
        action_logger: ActionLogger,
        numbering: IInvoiceNumberSequence | None = None,
        missing_policy: MissingRecordPolicy = MissingRecordPolicy.IGNORE,
        id_factory: Callable[[], str] = new_id,
    ):
        self._store = store
        self._organization = organization_repository
        self._action_logger = action_logger
        self._numbering = numbering or ScanInvoiceNumberSequence()
        self._missing_policy = missing_policy
        self._id_factory = id_factory

    async def list_invoices(self) -> list[Invoice]:
        """All invoices in storage order, unfiltered."""
        return await self._store.read()

    async def get_by_id(self, invoice_id: str) -> Invoice | None:
        """Pure lookup."""
        for invoice in await self._store.read():
            if invoice.id == invoice_id:
                return invoice
        return None

    async def search(self, query: str = "", status: InvoiceStatus | None = None) -> list[Invoice]:
        """Match customer name or invoice number, newest invoice date first."""
        needle = query.strip().lower()
        matches = [
            invoice
            for invoice in await self._store.read()
            if (status is None or invoice.status == status)
            and (
                not needle
                or needle in invoice.customer_name.lower()
                or needle in invoice.invoice_number.lower()
            )
        ]
        return sorted(matches, key=lambda inv: inv.date, reverse=True)

    async def get_next_invoice_number(self) -> str:
        """The number the next ``add`` would assign, without claiming it."""
        return await self._numbering.peek(await self._store.read())

    async def add(self, draft: InvoiceDraft) -> Invoice:
        """Number, snapshot, total, persist and log a new invoice."""
        snapshot = draft.organization_details or await self._organization.get()
        data = _with_totals(draft).model_dump(
            exclude={"id", "invoice_number", "organization_details"}
        )
        created: list[Invoice] = []

        async def append(invoices: list[Invoice]) -> list[Invoice]:
            invoice = Invoice(
                **data,
                id=self._id_factory(),
                invoice_number=await self._numbering.reserve(invoices),
                organization_details=snapshot.model_copy(deep=True),
            )
            created.append(invoice)
            return [*invoices, invoice]

        await self._store.mutate(append)
        invoice = created[0]

        await self._action_logger.log_action(
            "Created Invoice",
            InvoiceLogDetails(id=invoice.id, invoice_number=invoice.invoice_number),
        )
        logger.info(
            "invoice_created",
            invoice_id=invoice.id,
            invoice_number=invoice.invoice_number,
            grand_total=invoice.grand_total,
        )
        return invoice

    async def update(self, invoice: Invoice) -> None:
        """
        Replace the invoice with the same id.

        The stored invoice number is always kept. The stored organization
        snapshot is kept unless ``invoice.organization_details`` is given.

        Raises:
            InvoiceNotFoundError: If the id is unknown and the policy is RAISE
        """
        invoice_number = invoice.invoice_number

        async def replace(invoices: list[Invoice]) -> list[Invoice]:
            nonlocal invoice_number
            existing = next((inv for inv in invoices if inv.id == invoice.id), None)
            if existing is None:
                if self._missing_policy is MissingRecordPolicy.RAISE:
                    raise InvoiceNotFoundError(invoice.id)
                logger.warning("invoice_update_missing", invoice_id=invoice.id)
                return invoices

            invoice_number = existing.invoice_number
            replacement = _with_totals(invoice).model_copy(
                update={
                    "invoice_number": existing.invoice_number,
                    "organization_details": (
                        invoice.organization_details or existing.organization_details
                    ),
                },
                deep=True,
            )
            return [replacement if inv.id == invoice.id else inv for inv in invoices]

        await self._store.mutate(replace)
        await self._action_logger.log_action(
            "Updated Invoice",
            InvoiceLogDetails(id=invoice.id, invoice_number=invoice_number),
        )
        logger.info("invoice_updated", invoice_id=invoice.id)

    async def delete(self, invoice_id: str) -> None:
        """
        Remove the invoice with this id. Logs only if it existed.

        Raises:
            InvoiceNotFoundError: If the id is unknown and the policy is RAISE
        """
        removed: list[Invoice] = []

        async def remove(invoices: list[Invoice]) -> list[Invoice]:
            removed.extend(inv for inv in invoices if inv.id == invoice_id)
            if not removed:
                if self._missing_policy is MissingRecordPolicy.RAISE:
                    raise InvoiceNotFoundError(invoice_id)
                return invoices
            return [inv for inv in invoices if inv.id != invoice_id]

        await self._store.mutate(remove)
        if not removed:
            logger.debug("invoice_delete_missing", invoice_id=invoice_id)
            return

        await self._action_logger.log_action(
            "Deleted Invoice",
            InvoiceLogDetails(id=invoice_id, invoice_number=removed[0].invoice_number),
        )
        logger.info("invoice_deleted", invoice_id=invoice_id)


def _with_totals(invoice: DraftT) -> DraftT:
    """Fill in whichever of the three totals the caller left out."""
    if invoice.has_totals:
        return invoice
    totals = compute_totals(invoice.line_items, invoice.discount_amount)
    sub_total = totals.sub_total if invoice.sub_total is None else invoice.sub_total
    total_tax = totals.total_tax if invoice.total_tax is None else invoice.total_tax
    grand_total = (
        sub_total + total_tax - invoice.discount_amount
        if invoice.grand_total is None
        else invoice.grand_total
    )
    return invoice.model_copy(
        update={"sub_total": sub_total, "total_tax": total_tax, "grand_total": grand_total}
    )
