"""InvoiceFlow: single-tenant invoicing state and calculation engine."""

__version__ = "1.0.0"
