"""Inventory domain entities."""

from typing import Any

from pydantic import Field, field_validator

from invoiceflow.core.entities.base import StoredModel


class NewInventoryItem(StoredModel):
    """A product or service before the repository has assigned it an id."""

    name: str = Field(min_length=1)
    price: float = Field(default=0.0, ge=0)  # before tax
    quantity: int = Field(default=0, ge=0)  # in stock
    # Default rates; line items may override them
    cgst_rate: float | None = Field(default=None, ge=0, le=100)
    sgst_rate: float | None = Field(default=None, ge=0, le=100)
    description: str | None = None

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("quantity", mode="before")
    @classmethod
    def default_quantity(cls, v: Any) -> Any:
        """Records written before quantity existed carry null or nothing."""
        if v is None:
            return 0
        return v


class InventoryItem(NewInventoryItem):
    """Stored inventory record."""

    id: str
