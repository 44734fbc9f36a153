"""Catalog records: vendors and the items they supply."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pricebook.domain.model.entity import Entity, utcnow
from pricebook.domain.model.primitives import ZERO

if TYPE_CHECKING:
    from datetime import datetime
    from uuid import UUID

    from pricebook.domain.model.primitives import Markup, Money


@dataclass(eq=False, kw_only=True)
class Vendor(Entity):
    """A supplier. ``name`` is the unique display name used to find it again."""

    name: str
    contact_info: str | None = None
    payment_terms: str | None = None
    created_at: datetime = field(default_factory=utcnow)


@dataclass(frozen=True, slots=True)
class ItemPricing:
    """The four pricing fields an item carries at any point in time."""

    cost_ex_tax: Money
    markup: Markup
    sell_ex_tax: Money
    sell_inc_tax: Money


@dataclass(eq=False, kw_only=True)
class Item(Entity):
    """A catalog entry.

    Expected (monitored, not enforced): ``sell_ex_tax ~ cost_ex_tax * markup`` and,
    for taxable items, ``sell_inc_tax ~ sell_ex_tax * (1 + tax_rate)``. Tax-free
    items carry ``sell_inc_tax == sell_ex_tax``.
    """

    name: str
    category: str
    vendor_id: UUID | None = None
    cost_ex_tax: Money = ZERO
    markup: Markup = ZERO
    sell_ex_tax: Money = ZERO
    sell_inc_tax: Money = ZERO
    has_tax: bool = True
    sku: str | None = None
    barcode: str | None = None
    pos_catalog_id: str | None = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime | None = None

    @property
    def has_trusted_cost(self) -> bool:
        """A positive cost is assumed to come from a higher-fidelity source."""
        return self.cost_ex_tax is not None and self.cost_ex_tax > ZERO

    @property
    def pricing(self) -> ItemPricing:
        return ItemPricing(
            cost_ex_tax=self.cost_ex_tax if self.cost_ex_tax is not None else ZERO,
            markup=self.markup if self.markup is not None else ZERO,
            sell_ex_tax=self.sell_ex_tax if self.sell_ex_tax is not None else ZERO,
            sell_inc_tax=self.sell_inc_tax if self.sell_inc_tax is not None else ZERO,
        )

    def apply_pricing(self, pricing: ItemPricing) -> None:
        self.cost_ex_tax = pricing.cost_ex_tax
        self.markup = pricing.markup
        self.sell_ex_tax = pricing.sell_ex_tax
        self.sell_inc_tax = pricing.sell_inc_tax
        self.updated_at = utcnow()

    def associate(self, *, vendor_id: UUID | None, category: str) -> None:
        """Refresh the non-pricing fields an invoice is allowed to change."""
        self.vendor_id = vendor_id
        self.category = category
        self.updated_at = utcnow()

    def clear_cost(self) -> None:
        """Neutralise a cost that must be re-established from a trusted source."""
        self.cost_ex_tax = ZERO
        self.markup = ZERO
        self.updated_at = utcnow()
