"""Item reconciliation: decide which catalog item an invoice line describes."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pricebook.domain.model import ZERO, Item, ItemPricing, ReconcileAction
from pricebook.domain.reconciliation.ledger import PriceHistoryLedger
from pricebook.domain.reconciliation.match import DEFAULT_STRATEGIES, find_matching_item

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from pricebook.domain.model import InvoiceLineItem, MatchKind, PriceHistory
    from pricebook.domain.ports import ItemRepository, PriceHistoryRepository
    from pricebook.domain.reconciliation.match import MatchStrategy

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ReconcileOutcome:
    line_item_id: UUID
    item_id: UUID
    action: ReconcileAction
    match_kind: MatchKind | None = None
    price_change: PriceHistory | None = None

    @property
    def price_changed(self) -> bool:
        return self.price_change is not None


def _line_pricing(line_item: InvoiceLineItem) -> ItemPricing:
    return ItemPricing(
        cost_ex_tax=line_item.effective_unit_cost_ex_tax,
        markup=line_item.markup,
        sell_ex_tax=line_item.sell_ex_tax,
        sell_inc_tax=line_item.sell_inc_tax,
    )


class ItemReconciler:
    """Match a line to an item, then apply the cost-overwrite policy.

    A positive existing cost is trusted and never replaced by an invoice-derived
    one; only vendor and category are refreshed. A zero cost is replaced by the
    line's pricing through the ledger.
    """

    def __init__(
        self,
        items: ItemRepository,
        history: PriceHistoryRepository,
        *,
        strategies: Sequence[MatchStrategy] = DEFAULT_STRATEGIES,
    ) -> None:
        self._items = items
        self._ledger = PriceHistoryLedger(history)
        self._strategies = strategies

    def reconcile(
        self,
        line_item: InvoiceLineItem,
        *,
        vendor_id: UUID | None,
        invoice_id: UUID | None,
    ) -> ReconcileOutcome:
        match = find_matching_item(
            self._items, line_item.name, vendor_id, strategies=self._strategies
        )
        if match is None:
            item = self._create(line_item, vendor_id=vendor_id)
            line_item.link_item(item.id)
            return ReconcileOutcome(
                line_item_id=line_item.id, item_id=item.id, action=ReconcileAction.CREATED
            )

        item = match.item
        price_change: PriceHistory | None = None
        if item.has_trusted_cost:
            log.debug(
                "Keeping trusted cost %s of item %s for line %r",
                item.cost_ex_tax,
                item.id,
                line_item.name,
            )
        elif line_item.effective_unit_cost_ex_tax > ZERO:
            price_change = self._ledger.apply(
                item, _line_pricing(line_item), source_invoice_id=invoice_id
            )
            item.has_tax = line_item.has_tax
        item.associate(vendor_id=vendor_id, category=line_item.category)
        line_item.link_item(item.id)
        log.debug("Line %r matched item %s by %s", line_item.name, item.id, match.kind)
        return ReconcileOutcome(
            line_item_id=line_item.id,
            item_id=item.id,
            action=ReconcileAction.UPDATED,
            match_kind=match.kind,
            price_change=price_change,
        )

    def _create(self, line_item: InvoiceLineItem, *, vendor_id: UUID | None) -> Item:
        item = Item(
            name=line_item.name,
            category=line_item.category,
            vendor_id=vendor_id,
            has_tax=line_item.has_tax,
        )
        item.apply_pricing(_line_pricing(line_item))
        self._items.add(item)
        log.debug("Created item %s for line %r", item.id, line_item.name)
        return item
