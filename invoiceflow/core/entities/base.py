"""Shared base for persisted entities."""

from uuid import uuid4

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class StoredModel(BaseModel):
    """
    Base model for everything written to the key-value medium.

    Python attributes are snake_case; the stored JSON uses camelCase keys
    (``companyName``, ``invoiceNumber``) so existing browser exports load as-is.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
    )


def new_id() -> str:
    """Statistically unique identifier for stored records."""
    return str(uuid4())
