"""Price history ledger: the only path through which item pricing changes."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pricebook.domain.model import PriceHistory, differs_by_more_than_a_cent

if TYPE_CHECKING:
    from uuid import UUID

    from pricebook.domain.model import Item, ItemPricing
    from pricebook.domain.ports import PriceHistoryRepository

log = logging.getLogger(__name__)


class PriceHistoryLedger:
    """Records the pricing an item held before each accepted cost change.

    The history row is persisted before the item is touched, so every row
    describes a state the item really had.
    """

    def __init__(self, history: PriceHistoryRepository) -> None:
        self._history = history

    def apply(
        self,
        item: Item,
        pricing: ItemPricing,
        *,
        source_invoice_id: UUID | None,
    ) -> PriceHistory | None:
        """Give ``item`` new pricing, returning the history row when one was written.

        Cost moves of a cent or less are applied without a history row.
        """

        entry: PriceHistory | None = None
        if differs_by_more_than_a_cent(item.pricing.cost_ex_tax, pricing.cost_ex_tax):
            entry = PriceHistory.snapshot(item, source_invoice_id=source_invoice_id)
            self._history.append(entry)
            log.debug(
                "Recorded price change for item %s: %s -> %s",
                item.id,
                entry.cost_ex_tax,
                pricing.cost_ex_tax,
            )
        item.apply_pricing(pricing)
        return entry
