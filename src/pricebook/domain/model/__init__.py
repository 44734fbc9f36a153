"""Public domain model surface."""

from __future__ import annotations

from pricebook.domain.model.audit import PriceHistory
from pricebook.domain.model.catalog import Item, ItemPricing, Vendor
from pricebook.domain.model.entity import Entity, new_id, utcnow
from pricebook.domain.model.enums import InvoiceStatus, MatchKind, ReconcileAction
from pricebook.domain.model.invoice import UNCATEGORISED, Invoice, InvoiceLineItem
from pricebook.domain.model.primitives import (
    CENT,
    ZERO,
    DecimalInput,
    Markup,
    Money,
    TaxRate,
    differs_by_more_than_a_cent,
    quantize_for_storage,
    round_to_cents,
    to_decimal,
)

__all__ = [  # noqa: RUF022
    # base
    "Entity",
    "new_id",
    "utcnow",
    # catalog
    "Vendor",
    "Item",
    "ItemPricing",
    # invoices
    "Invoice",
    "InvoiceLineItem",
    "UNCATEGORISED",
    # audit
    "PriceHistory",
    # enums
    "InvoiceStatus",
    "MatchKind",
    "ReconcileAction",
    # primitives
    "CENT",
    "ZERO",
    "DecimalInput",
    "Markup",
    "Money",
    "TaxRate",
    "differs_by_more_than_a_cent",
    "quantize_for_storage",
    "round_to_cents",
    "to_decimal",
]
