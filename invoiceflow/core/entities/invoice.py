"""
Invoice domain entities with Pydantic v2 validation.

Line items are embedded in the invoice and never persisted on their own.
"""

from datetime import UTC, datetime
from datetime import date as date_type
from enum import Enum
from typing import Any

from pydantic import Field, field_serializer, field_validator

from invoiceflow.core.entities.base import StoredModel, new_id
from invoiceflow.core.entities.inventory import InventoryItem
from invoiceflow.core.entities.organization import OrganizationDetails


class InvoiceStatus(str, Enum):
    """Invoice lifecycle status."""

    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    VOID = "void"


class LineItem(StoredModel):
    """One priced entry on an invoice."""

    id: str = Field(default_factory=new_id)
    inventory_item_id: str | None = None  # lookup only
    item_name: str = ""
    quantity: float = Field(default=1, ge=1)
    price: float = Field(default=0.0, ge=0)  # unit price before tax
    cgst_rate: float = Field(default=0.0, ge=0, le=100)
    sgst_rate: float = Field(default=0.0, ge=0, le=100)

    @field_validator("cgst_rate", "sgst_rate", mode="before")
    @classmethod
    def default_rate(cls, v: Any) -> Any:
        if v is None or v == "":
            return 0.0
        return v

    @classmethod
    def from_inventory_item(cls, item: InventoryItem, quantity: float = 1) -> "LineItem":
        """Build a line from an inventory record, copying its price and default rates."""
        return cls(
            inventory_item_id=item.id,
            item_name=item.name,
            quantity=quantity,
            price=item.price,
            cgst_rate=item.cgst_rate or 0.0,
            sgst_rate=item.sgst_rate or 0.0,
        )


class InvoiceDraft(StoredModel):
    """
    Invoice data supplied by the caller before numbering.

    Totals may be left as None; the repository fills them from the line items.
    The organization snapshot may be left as None; the repository takes one.
    """

    # Timezone-aware instant; stored the way browsers write Date.toISOString()
    date: datetime = Field(default_factory=lambda: datetime.now(UTC))
    customer_name: str = Field(min_length=1)
    customer_address: str | None = None
    line_items: list[LineItem] = Field(min_length=1)

    sub_total: float | None = None
    total_tax: float | None = None
    discount_amount: float = Field(default=0.0, ge=0)
    grand_total: float | None = None

    organization_details: OrganizationDetails | None = None
    notes: str | None = None
    status: InvoiceStatus = InvoiceStatus.DRAFT

    @field_validator("date", mode="before")
    @classmethod
    def coerce_date(cls, v: Any) -> Any:
        """Plain dates mean midnight UTC; naive timestamps are taken as UTC."""
        if isinstance(v, str) and "T" not in v:
            v = date_type.fromisoformat(v)
        if isinstance(v, date_type) and not isinstance(v, datetime):
            return datetime(v.year, v.month, v.day, tzinfo=UTC)
        return v

    @field_validator("date", mode="after")
    @classmethod
    def ensure_aware(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=UTC)
        return v

    @field_serializer("date", when_used="json")
    def serialize_date(self, v: datetime) -> str:
        return v.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")

    @field_validator("discount_amount", mode="before")
    @classmethod
    def default_discount(cls, v: Any) -> Any:
        if v is None or v == "":
            return 0.0
        return v

    @property
    def has_totals(self) -> bool:
        return None not in (self.sub_total, self.total_tax, self.grand_total)


class Invoice(InvoiceDraft):
    """Stored invoice with its system-assigned id and sequence number."""

    id: str
    invoice_number: str
