"""
Domain exceptions for InvoiceFlow.

Provides specific exception types for different error scenarios.
"""

from typing import Any


class InvoiceFlowError(Exception):
    """Base exception for all InvoiceFlow errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for callers that surface errors to users."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Storage Exceptions
class StorageError(InvoiceFlowError):
    """Base exception for storage operations."""

    pass


class StorageWriteError(StorageError):
    """The durable medium rejected a write (capacity, I/O, locking)."""

    def __init__(self, key: str, error: str):
        super().__init__(
            f"Failed to write '{key}': {error}",
            code="STORAGE_WRITE_FAILED",
            details={"key": key, "error": error},
        )


class StorageReadError(StorageError):
    """The durable medium could not be read at all."""

    def __init__(self, key: str, error: str):
        super().__init__(
            f"Failed to read '{key}': {error}",
            code="STORAGE_READ_FAILED",
            details={"key": key, "error": error},
        )


# Record Exceptions
class RecordNotFoundError(InvoiceFlowError):
    """Base exception for lookups of unknown ids."""

    pass


class InventoryItemNotFoundError(RecordNotFoundError):
    """Inventory item not found."""

    def __init__(self, item_id: str):
        super().__init__(
            f"Inventory item not found: {item_id}",
            code="INVENTORY_ITEM_NOT_FOUND",
            details={"item_id": item_id},
        )


class InvoiceNotFoundError(RecordNotFoundError):
    """Invoice not found."""

    def __init__(self, invoice_id: str):
        super().__init__(
            f"Invoice not found: {invoice_id}",
            code="INVOICE_NOT_FOUND",
            details={"invoice_id": invoice_id},
        )


# Validation Exceptions
class ValidationError(InvoiceFlowError):
    """Input validation failed."""

    def __init__(self, field: str, reason: str, value: Any = None):
        super().__init__(
            f"Validation failed for '{field}': {reason}",
            code="VALIDATION_ERROR",
            details={"field": field, "reason": reason, "value": value},
        )
