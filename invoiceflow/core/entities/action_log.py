"""
Action log entities.

Detail payloads are a tagged union of the shapes the repositories emit,
with a free-form mapping as fallback for anything else.
"""

from datetime import UTC, datetime
from typing import Annotated, Any, Literal, Union

from pydantic import Field, TypeAdapter, field_validator

from invoiceflow.core.entities.base import StoredModel, new_id
from invoiceflow.core.entities.organization import OrganizationDetails


class InventoryItemLogDetails(StoredModel):
    """Payload for inventory add/update/delete events."""

    kind: Literal["inventory_item"] = "inventory_item"
    id: str
    name: str


class InvoiceLogDetails(StoredModel):
    """Payload for invoice create/update/delete events."""

    kind: Literal["invoice"] = "invoice"
    id: str
    invoice_number: str


class OrganizationLogDetails(OrganizationDetails):
    """Payload for organization updates: the new field values."""

    kind: Literal["organization"] = "organization"


TypedLogDetails = Annotated[
    InventoryItemLogDetails | InvoiceLogDetails | OrganizationLogDetails,
    Field(discriminator="kind"),
]

_typed_details_adapter: TypeAdapter[TypedLogDetails] = TypeAdapter(TypedLogDetails)
_KNOWN_KINDS = {"inventory_item", "invoice", "organization"}


def _utc_now_iso() -> str:
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


class ActionLogEntry(StoredModel):
    """One audit trail event. Entries are never edited once written."""

    id: str = Field(default_factory=new_id)
    timestamp: str = Field(default_factory=_utc_now_iso)
    action: str
    details: Union[dict[str, Any], TypedLogDetails, None] = Field(
        default=None, union_mode="left_to_right"
    )

    @field_validator("details", mode="before")
    @classmethod
    def parse_typed_details(cls, v: Any) -> Any:
        """Tagged payloads become typed models; anything else stays a plain map."""
        if isinstance(v, dict) and v.get("kind") in _KNOWN_KINDS:
            return _typed_details_adapter.validate_python(v)
        return v
