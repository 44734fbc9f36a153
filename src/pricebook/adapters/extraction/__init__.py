"""Public interface for the extraction adapter."""

from __future__ import annotations

from .schema import ExtractedInvoicePayload, LineItemPayload, VendorPayload
from .translator import parse_extracted_invoice, to_invoice_draft

__all__ = [
    "ExtractedInvoicePayload",
    "LineItemPayload",
    "VendorPayload",
    "parse_extracted_invoice",
    "to_invoice_draft",
]
