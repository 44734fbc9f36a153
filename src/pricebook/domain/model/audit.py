"""Append-only price history records."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pricebook.domain.model.entity import Entity, utcnow
from pricebook.domain.model.primitives import ZERO

if TYPE_CHECKING:
    from datetime import datetime
    from uuid import UUID

    from pricebook.domain.model.catalog import Item
    from pricebook.domain.model.primitives import Markup, Money


@dataclass(eq=False, kw_only=True)
class PriceHistory(Entity):
    """Pricing an item held *before* an accepted change, and the invoice that caused it.

    Rows are written once and never updated or deleted.
    """

    item_id: UUID
    cost_ex_tax: Money = ZERO
    markup: Markup = ZERO
    sell_ex_tax: Money = ZERO
    sell_inc_tax: Money = ZERO
    source_invoice_id: UUID | None = None
    changed_at: datetime = field(default_factory=utcnow)

    @classmethod
    def snapshot(cls, item: Item, *, source_invoice_id: UUID | None) -> PriceHistory:
        pricing = item.pricing
        return cls(
            item_id=item.id,
            cost_ex_tax=pricing.cost_ex_tax,
            markup=pricing.markup,
            sell_ex_tax=pricing.sell_ex_tax,
            sell_inc_tax=pricing.sell_inc_tax,
            source_invoice_id=source_invoice_id,
        )
