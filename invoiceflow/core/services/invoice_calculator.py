"""
Invoice totals and price conversions.

Everything here is a pure function: no I/O, no logging, identical output for
identical input, so callers may recompute on every keystroke. Amounts are
plain floats; rounding to two decimals belongs at the presentation boundary
(see ``round_money``), never inside ``compute_totals``.
"""

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import NamedTuple

from invoiceflow.core.entities.invoice import LineItem
from invoiceflow.core.exceptions import ValidationError


class InvoiceTotals(NamedTuple):
    """Derived invoice amounts."""

    sub_total: float
    total_tax: float
    grand_total: float


class PriceField(str, Enum):
    """Which of the two price fields the caller last edited."""

    PRICE = "price"
    FINAL_PRICE = "final_price"


def _tax_factor(cgst_rate: float, sgst_rate: float) -> float:
    return (cgst_rate + sgst_rate) / 100


def line_item_total(item: LineItem) -> float:
    """quantity * price * (1 + (cgst + sgst) / 100)."""
    return item.quantity * item.price * (1 + _tax_factor(item.cgst_rate, item.sgst_rate))


def compute_totals(line_items: Iterable[LineItem], discount_amount: float = 0.0) -> InvoiceTotals:
    """
    Compute subtotal, tax and grand total for a set of line items.

    Args:
        line_items: Invoice lines (any iterable, consumed once)
        discount_amount: Flat discount subtracted from the grand total

    Returns:
        InvoiceTotals where grand_total == sub_total + total_tax - discount_amount

    Raises:
        ValidationError: If the discount is negative
    """
    if discount_amount < 0:
        raise ValidationError("discount_amount", "must not be negative", discount_amount)

    sub_total = 0.0
    total_tax = 0.0
    for item in line_items:
        amount = item.quantity * item.price
        sub_total += amount
        total_tax += amount * _tax_factor(item.cgst_rate, item.sgst_rate)

    return InvoiceTotals(
        sub_total=sub_total,
        total_tax=total_tax,
        grand_total=sub_total + total_tax - discount_amount,
    )


def tax_inclusive_price(price: float, cgst_rate: float = 0.0, sgst_rate: float = 0.0) -> float:
    """Pre-tax price -> price with both tax components applied."""
    return price * (1 + _tax_factor(cgst_rate, sgst_rate))


def pre_tax_price(final_price: float, cgst_rate: float = 0.0, sgst_rate: float = 0.0) -> float:
    """Tax-inclusive price -> pre-tax price.

    A combined rate of -100% would divide by zero; the final price is returned
    unchanged in that case.
    """
    divisor = 1 + _tax_factor(cgst_rate, sgst_rate)
    if divisor == 0:
        return final_price
    return final_price / divisor


def derive_prices(
    price: float,
    final_price: float,
    cgst_rate: float,
    sgst_rate: float,
    authoritative: PriceField,
) -> tuple[float, float]:
    """
    Recompute the non-authoritative price field from the authoritative one.

    Returns:
        (price, final_price)
    """
    if authoritative is PriceField.FINAL_PRICE:
        return pre_tax_price(final_price, cgst_rate, sgst_rate), final_price
    return price, tax_inclusive_price(price, cgst_rate, sgst_rate)


def round_money(value: float) -> float:
    """Round half-up to two decimals for display."""
    return float(Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))
