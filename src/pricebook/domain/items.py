"""Read-side services for catalog items."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

from pricebook.domain.model import ZERO, round_to_cents
from pricebook.domain.pricing import PricingCalculation, validate_pricing

if TYPE_CHECKING:
    from collections.abc import Callable
    from uuid import UUID

    from pricebook.domain.model import Item, PriceHistory, TaxRate
    from pricebook.domain.ports import CatalogUnitOfWork

DEFAULT_HISTORY_LIMIT = 10


def get_price_history(
    item_id: UUID,
    *,
    unit_of_work_factory: Callable[[], CatalogUnitOfWork],
    limit: int | None = DEFAULT_HISTORY_LIMIT,
) -> list[PriceHistory]:
    """Most recent price history entries for ``item_id``, newest first."""

    with unit_of_work_factory() as uow:
        return list(uow.repositories.price_history.for_item(item_id, limit=limit))


def check_item_pricing(item: Item, tax_rate: TaxRate = Decimal("0.10")) -> list[str]:
    """Validate an item's stored prices against the calculator's invariants.

    The expected tax is derived from the stored sell price, so a stored
    inclusive price that drifted from ``sell_ex_tax * (1 + tax_rate)`` is reported.
    Tax-free items are checked against a zero rate.
    """

    pricing = item.pricing
    rate = tax_rate if item.has_tax else ZERO
    calculation = PricingCalculation(
        cost_ex_tax=pricing.cost_ex_tax,
        markup=pricing.markup,
        sell_ex_tax=pricing.sell_ex_tax,
        tax_amount=round_to_cents(pricing.sell_ex_tax * rate),
        sell_inc_tax=pricing.sell_inc_tax,
    )
    return validate_pricing(calculation)
