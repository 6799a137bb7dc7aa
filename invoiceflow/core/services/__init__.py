"""Core domain services (pure calculation)."""

from invoiceflow.core.services.invoice_calculator import (
    InvoiceTotals,
    PriceField,
    compute_totals,
    derive_prices,
    line_item_total,
    pre_tax_price,
    round_money,
    tax_inclusive_price,
)

__all__ = [
    "InvoiceTotals",
    "PriceField",
    "compute_totals",
    "derive_prices",
    "line_item_total",
    "pre_tax_price",
    "round_money",
    "tax_inclusive_price",
]
