"""Invoices and their line items."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import TYPE_CHECKING

from pricebook.domain.errors import (
    AlreadyCommittedError,
    InvoicePostedError,
    LineItemNotFoundError,
    NoLineItemsError,
)
from pricebook.domain.model.entity import Entity, utcnow
from pricebook.domain.model.enums import InvoiceStatus
from pricebook.domain.model.primitives import ZERO, round_to_cents

if TYPE_CHECKING:
    from datetime import date, datetime
    from uuid import UUID

    from pricebook.domain.model.primitives import Markup, Money, TaxRate

UNCATEGORISED = "Uncategorised"


@dataclass(eq=False, kw_only=True)
class InvoiceLineItem(Entity):
    """One printed line of an invoice plus the pricing derived from it.

    ``unit_cost_ex_tax`` is the raw cost as printed (possibly a case price);
    ``effective_unit_cost_ex_tax`` is that cost divided by the detected pack size.
    """

    name: str
    quantity: Decimal
    unit_cost_ex_tax: Money
    detected_pack_size: int = 1
    effective_unit_cost_ex_tax: Money = ZERO
    category: str = UNCATEGORISED
    markup: Markup = ZERO
    sell_ex_tax: Money = ZERO
    sell_inc_tax: Money = ZERO
    has_tax: bool = True
    item_id: UUID | None = None
    notes: str | None = None
    position: int = 0
    invoice_id: UUID | None = None
    created_at: datetime = field(default_factory=utcnow)

    @property
    def line_total_ex_tax(self) -> Money:
        return round_to_cents(self.unit_cost_ex_tax * self.quantity)

    def link_item(self, item_id: UUID) -> None:
        self.item_id = item_id

    def append_note(self, entry: str, *, at: datetime | None = None) -> None:
        """Append a timestamped entry to the human-readable change log."""
        stamp = (at or utcnow()).strftime("%Y-%m-%d %H:%M")
        line = f"[{stamp}] {entry}"
        self.notes = f"{self.notes}\n{line}" if self.notes else line


@dataclass(eq=False, kw_only=True)
class Invoice(Entity):
    """A vendor invoice. Created ``PARSED``; moves once to ``POSTED``."""

    vendor_id: UUID
    invoice_number: str | None = None
    invoice_date: date | None = None
    status: InvoiceStatus = InvoiceStatus.PARSED
    subtotal_ex_tax: Money = ZERO
    tax_amount: Money = ZERO
    total_inc_tax: Money = ZERO
    raw_document: bytes | None = field(default=None, repr=False)
    # Rectification metadata belongs to another workflow; carried, never interpreted.
    needs_rectification: bool = False
    rectification_notes: str | None = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime | None = None

    line_items: list[InvoiceLineItem] = field(
        default_factory=list["InvoiceLineItem"], repr=False
    )

    @property
    def is_posted(self) -> bool:
        return self.status.is_terminal

    def ensure_committable(self) -> None:
        if self.status is not InvoiceStatus.PARSED:
            raise AlreadyCommittedError(self.id)
        if not self.line_items:
            raise NoLineItemsError(self.id)

    def ensure_editable(self) -> None:
        if self.status is not InvoiceStatus.PARSED:
            raise InvoicePostedError(self.id)

    def add_line_item(self, line_item: InvoiceLineItem) -> InvoiceLineItem:
        self.ensure_editable()
        line_item.position = len(self.line_items)
        line_item.invoice_id = self.id
        self.line_items.append(line_item)
        return line_item

    def line_item(self, line_item_id: UUID) -> InvoiceLineItem:
        for line_item in self.line_items:
            if line_item.id == line_item_id:
                return line_item
        raise LineItemNotFoundError(self.id, line_item_id)

    def remove_line_item(self, line_item: InvoiceLineItem) -> None:
        self.ensure_editable()
        if line_item not in self.line_items:
            raise LineItemNotFoundError(self.id, line_item.id)
        self.line_items.remove(line_item)

    def recompute_totals(self, tax_rate: TaxRate) -> None:
        """Sum line totals; tax only accrues on lines flagged ``has_tax``."""

        subtotal = ZERO
        tax = ZERO
        for line_item in self.line_items:
            line_total = line_item.line_total_ex_tax
            subtotal += line_total
            if line_item.has_tax:
                tax += round_to_cents(line_total * tax_rate)
        self.subtotal_ex_tax = subtotal
        self.tax_amount = tax
        self.total_inc_tax = subtotal + tax
        self.updated_at = utcnow()
