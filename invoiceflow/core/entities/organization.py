"""Organization profile entity."""

import re
from typing import Any

from pydantic import field_validator

from invoiceflow.config.settings import HEX_COLOR_PATTERN
from invoiceflow.core.entities.base import StoredModel

DEFAULT_INVOICE_HEADER_COLOR = "#739EDC"
DEFAULT_THEME_ACCENT_COLOR = "#149E8E"


class OrganizationDetails(StoredModel):
    """
    Company and branding profile.

    Color fields are either empty (use the default) or a ``#RRGGBB`` hex value.
    """

    company_name: str = ""
    company_logo: str | None = None  # data-URI or URL
    gst_number: str | None = None
    address: str = ""
    contact_details: str = ""
    invoice_header_color: str | None = None
    theme_accent_color: str | None = None

    @field_validator("company_name", "address", "contact_details", mode="before")
    @classmethod
    def coerce_string(cls, v: Any) -> str:
        """Ensure text fields are never None."""
        if v is None:
            return ""
        return str(v).strip()

    @field_validator("invoice_header_color", "theme_accent_color", mode="after")
    @classmethod
    def check_hex_color(cls, v: str | None) -> str | None:
        if v is None or v == "":
            return v
        if not re.match(HEX_COLOR_PATTERN, v):
            raise ValueError("must be a hex color like #RRGGBB, or empty to use the default")
        return v

    def with_defaults(
        self,
        header_color: str = DEFAULT_INVOICE_HEADER_COLOR,
        accent_color: str = DEFAULT_THEME_ACCENT_COLOR,
    ) -> "OrganizationDetails":
        """Return a copy with empty color fields replaced by the defaults."""
        return self.model_copy(
            update={
                "invoice_header_color": self.invoice_header_color or header_color,
                "theme_accent_color": self.theme_accent_color or accent_color,
            },
            deep=True,
        )
