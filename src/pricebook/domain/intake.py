"""Recording extracted invoices as parsed invoices with priced lines."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pricebook.domain.model import (
    UNCATEGORISED,
    ZERO,
    Invoice,
    InvoiceLineItem,
    Vendor,
    to_decimal,
)
from pricebook.domain.pricing import apply_line_pricing

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import date

    from pricebook.domain.model import DecimalInput
    from pricebook.domain.ports import CatalogUnitOfWork, VendorRepository
    from pricebook.domain.pricing import PricingRules

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, kw_only=True)
class LineItemDraft:
    """A raw line as produced by extraction: nothing derived yet."""

    name: str
    quantity: DecimalInput
    unit_cost_ex_tax: DecimalInput
    has_tax: bool = True
    category: str | None = None
    markup: DecimalInput | None = None
    unit_description: str | None = None
    notes: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class InvoiceDraft:
    vendor_name: str
    invoice_number: str | None = None
    invoice_date: date | None = None
    line_items: tuple[LineItemDraft, ...] = field(default=())
    raw_document: bytes | None = field(default=None, repr=False)


def _vendor(vendors: VendorRepository, name: str) -> Vendor:
    vendor = vendors.get_by_name(name)
    if vendor is None:
        vendor = Vendor(name=name)
        vendors.add(vendor)
        log.info("Created vendor %r", name)
    return vendor


def build_line_item(draft: LineItemDraft, rules: PricingRules) -> InvoiceLineItem:
    """Price one extracted line with pack size, markup and calculator."""

    quantity = to_decimal(draft.quantity, field="quantity")
    if quantity <= ZERO:
        raise ValueError(f"quantity must be positive, got {draft.quantity!r}")
    unit_cost = to_decimal(draft.unit_cost_ex_tax, field="unit_cost_ex_tax")
    if unit_cost < ZERO:
        raise ValueError(f"unit_cost_ex_tax must not be negative, got {draft.unit_cost_ex_tax!r}")

    category = (draft.category or "").strip() or UNCATEGORISED
    pricing = rules.price_line(
        name=draft.name,
        unit_cost_ex_tax=unit_cost,
        category=category,
        markup=draft.markup,
        unit_description=draft.unit_description,
        has_tax=draft.has_tax,
    )
    line_item = InvoiceLineItem(
        name=draft.name.strip(),
        quantity=quantity,
        unit_cost_ex_tax=unit_cost,
        category=category,
        has_tax=draft.has_tax,
        notes=draft.notes,
    )
    apply_line_pricing(line_item, pricing)
    return line_item


def record_invoice(
    draft: InvoiceDraft,
    *,
    unit_of_work_factory: Callable[[], CatalogUnitOfWork],
    rules: PricingRules,
) -> Invoice:
    """Persist ``draft`` as a ``PARSED`` invoice, creating its vendor on first sight."""

    line_items = [build_line_item(line, rules) for line in draft.line_items]

    with unit_of_work_factory() as uow:
        repositories = uow.repositories
        vendor = _vendor(repositories.vendors, draft.vendor_name.strip())
        invoice = Invoice(
            vendor_id=vendor.id,
            invoice_number=draft.invoice_number,
            invoice_date=draft.invoice_date,
            raw_document=draft.raw_document,
        )
        for line_item in line_items:
            invoice.add_line_item(line_item)
        invoice.recompute_totals(rules.tax_rate)
        repositories.invoices.add(invoice)
        uow.commit()

    log.info(
        "Recorded invoice %s from %r with %d lines, total %s",
        invoice.id,
        draft.vendor_name,
        len(line_items),
        invoice.total_inc_tax,
    )
    return invoice
