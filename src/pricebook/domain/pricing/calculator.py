"""Exact fixed-point pricing arithmetic."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from pricebook.domain.model.primitives import (
    CENT,
    ZERO,
    DecimalInput,
    Markup,
    Money,
    TaxRate,
    round_to_cents,
    to_decimal,
)


@dataclass(frozen=True, slots=True)
class PricingCalculation:
    """Result of :func:`calculate_pricing`.

    ``effective_cost_ex_tax`` is only populated when the pack size exceeds one so a
    reviewer can see that a case price was converted to a unit price.
    """

    cost_ex_tax: Money
    markup: Markup
    sell_ex_tax: Money
    tax_amount: Money
    sell_inc_tax: Money
    effective_cost_ex_tax: Money | None = None

    @property
    def unit_cost_ex_tax(self) -> Money:
        """Cost of a single sellable unit."""
        if self.effective_cost_ex_tax is not None:
            return self.effective_cost_ex_tax
        return self.cost_ex_tax


def calculate_pricing(
    cost_ex_tax: DecimalInput,
    markup: DecimalInput,
    pack_size: int = 1,
    tax_rate: DecimalInput = Decimal("0.10"),
) -> PricingCalculation:
    """Turn an invoiced cost into a consistent set of sell prices.

    The sell price is rounded before tax is derived from it, so
    ``sell_inc_tax == sell_ex_tax + tax_amount`` holds exactly.

    Raises ``ValueError`` for non-numeric input, ``pack_size < 1`` or a negative
    tax rate. Non-positive costs and markups are accepted here and reported by
    :func:`validate_pricing`.
    """

    if isinstance(pack_size, bool) or not isinstance(pack_size, int):
        raise ValueError(f"pack_size must be an integer, got {pack_size!r}")
    if pack_size < 1:
        raise ValueError(f"pack_size must be at least 1, got {pack_size}")

    cost = to_decimal(cost_ex_tax, field="cost_ex_tax")
    multiplier = to_decimal(markup, field="markup")
    rate = to_decimal(tax_rate, field="tax_rate")
    if rate < ZERO:
        raise ValueError(f"tax_rate must not be negative, got {tax_rate!r}")

    effective_cost = cost / Decimal(pack_size)
    sell_ex_tax = round_to_cents(effective_cost * multiplier)
    tax_amount = round_to_cents(sell_ex_tax * rate)
    sell_inc_tax = sell_ex_tax + tax_amount

    return PricingCalculation(
        cost_ex_tax=round_to_cents(cost),
        markup=multiplier,
        sell_ex_tax=sell_ex_tax,
        tax_amount=tax_amount,
        sell_inc_tax=sell_inc_tax,
        effective_cost_ex_tax=round_to_cents(effective_cost) if pack_size > 1 else None,
    )


def validate_pricing(calculation: PricingCalculation) -> list[str]:
    """Return every violated pricing invariant; an empty list means consistent.

    The sell price is compared with the unit cost, not the raw invoiced cost, so
    a case price that was correctly split into units does not fail the
    "greater than cost" check. Without a pack size the two are the same.
    """

    errors: list[str] = []
    if calculation.cost_ex_tax <= ZERO:
        errors.append("Cost ex tax must be positive")
    if calculation.markup <= ZERO:
        errors.append("Markup must be positive")
    if calculation.sell_ex_tax <= calculation.unit_cost_ex_tax:
        errors.append("Sell price ex tax must be greater than cost")
    if abs(calculation.sell_inc_tax - (calculation.sell_ex_tax + calculation.tax_amount)) > CENT:
        errors.append("Tax calculation is inconsistent")
    return errors
