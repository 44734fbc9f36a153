"""Translate extraction payloads into intake drafts."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from pricebook.domain.intake import InvoiceDraft, LineItemDraft

from .schema import ExtractedInvoicePayload

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .schema import LineItemPayload

log = getLogger(__name__)


def parse_extracted_invoice(data: str | bytes | Mapping[str, object]) -> ExtractedInvoicePayload:
    """Validate raw extractor output (JSON text or an already decoded mapping)."""

    if isinstance(data, str | bytes):
        return ExtractedInvoicePayload.model_validate_json(data)
    return ExtractedInvoicePayload.model_validate(data)


def _line_item_draft(payload: LineItemPayload) -> LineItemDraft:
    return LineItemDraft(
        name=payload.name.strip(),
        quantity=payload.quantity,
        unit_cost_ex_tax=payload.unit_cost_ex_tax,
        has_tax=payload.is_taxable,
        category=payload.category,
        markup=payload.markup,
        unit_description=payload.unit_description,
    )


def to_invoice_draft(
    payload: ExtractedInvoicePayload, *, raw_document: bytes | None = None
) -> InvoiceDraft:
    """Build an :class:`InvoiceDraft`; ``raw_document`` is stored without inspection."""

    line_items = tuple(_line_item_draft(line) for line in payload.line_items)
    if not line_items:
        log.warning("Extraction for vendor %r produced no line items", payload.vendor.name)
    return InvoiceDraft(
        vendor_name=payload.vendor.name,
        invoice_number=payload.invoice_number,
        invoice_date=payload.invoice_date,
        line_items=line_items,
        raw_document=raw_document,
    )
