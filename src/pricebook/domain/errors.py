"""Precondition failures surfaced to callers with stable error codes."""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from uuid import UUID


class PricebookError(Exception):
    """Base class for caller-facing precondition violations."""

    code: ClassVar[str] = "PRICEBOOK_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


class InvoiceNotFoundError(PricebookError):
    code: ClassVar[str] = "INVOICE_NOT_FOUND"

    def __init__(self, invoice_id: UUID) -> None:
        super().__init__(f"Invoice {invoice_id} not found")
        self.invoice_id = invoice_id


class AlreadyCommittedError(PricebookError):
    code: ClassVar[str] = "ALREADY_COMMITTED"

    def __init__(self, invoice_id: UUID) -> None:
        super().__init__(f"Invoice {invoice_id} has already been committed")
        self.invoice_id = invoice_id


class NoLineItemsError(PricebookError):
    code: ClassVar[str] = "NO_LINE_ITEMS"

    def __init__(self, invoice_id: UUID) -> None:
        super().__init__(f"Invoice {invoice_id} has no line items to commit")
        self.invoice_id = invoice_id


class InvoicePostedError(PricebookError):
    """Raised when editing or deleting an invoice that is already posted."""

    code: ClassVar[str] = "INVOICE_POSTED"

    def __init__(self, invoice_id: UUID) -> None:
        super().__init__(f"Invoice {invoice_id} is posted and can no longer be changed")
        self.invoice_id = invoice_id


class LineItemNotFoundError(PricebookError):
    code: ClassVar[str] = "LINE_ITEM_NOT_FOUND"

    def __init__(self, invoice_id: UUID, line_item_id: UUID) -> None:
        super().__init__(f"Line item {line_item_id} not found on invoice {invoice_id}")
        self.invoice_id = invoice_id
        self.line_item_id = line_item_id


class ItemNotFoundError(PricebookError):
    code: ClassVar[str] = "ITEM_NOT_FOUND"

    def __init__(self, item_id: UUID) -> None:
        super().__init__(f"Item {item_id} not found")
        self.item_id = item_id
