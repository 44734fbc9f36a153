"""Line-level pricing: pack size, markup and calculator combined."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING

from pricebook.domain.model.catalog import ItemPricing
from pricebook.domain.model.primitives import ZERO, quantize_for_storage, to_decimal
from pricebook.domain.pricing.calculator import PricingCalculation, calculate_pricing
from pricebook.domain.pricing.markup import MarkupResolver
from pricebook.domain.pricing.pack_size import detect_pack_size

if TYPE_CHECKING:
    from pricebook.domain.model.invoice import InvoiceLineItem
    from pricebook.domain.model.primitives import DecimalInput, Markup, Money, TaxRate

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LinePricing:
    """Canonical pricing fields derived for one invoice line."""

    pack_size: int
    effective_unit_cost_ex_tax: Money
    markup: Markup
    calculation: PricingCalculation

    @property
    def sell_ex_tax(self) -> Money:
        return self.calculation.sell_ex_tax

    @property
    def sell_inc_tax(self) -> Money:
        return self.calculation.sell_inc_tax

    def item_pricing(self) -> ItemPricing:
        return ItemPricing(
            cost_ex_tax=self.effective_unit_cost_ex_tax,
            markup=self.markup,
            sell_ex_tax=self.sell_ex_tax,
            sell_inc_tax=self.sell_inc_tax,
        )


@dataclass(frozen=True, slots=True)
class PricingRules:
    """Explicit pricing configuration handed to intake and line editing.

    Lines flagged as tax-free are priced with a zero tax rate.
    """

    markups: MarkupResolver
    tax_rate: TaxRate = Decimal("0.10")

    def price_line(
        self,
        *,
        name: str,
        unit_cost_ex_tax: DecimalInput,
        category: str | None,
        markup: DecimalInput | None = None,
        unit_description: str | None = None,
        has_tax: bool = True,
    ) -> LinePricing:
        cost = to_decimal(unit_cost_ex_tax, field="unit_cost_ex_tax")
        pack_size = detect_pack_size(name, unit_description)
        effective_cost = quantize_for_storage(cost / Decimal(pack_size))
        if pack_size > 1 and cost > ZERO and effective_cost <= ZERO:
            log.warning(
                "Ignoring pack size %d for %r: unit cost %s would round to zero",
                pack_size,
                name,
                cost,
            )
            pack_size = 1
            effective_cost = quantize_for_storage(cost)
        resolved_markup = self.markups.resolve(category, markup)
        calculation = calculate_pricing(
            cost,
            resolved_markup,
            pack_size,
            self.tax_rate if has_tax else ZERO,
        )
        return LinePricing(
            pack_size=pack_size,
            effective_unit_cost_ex_tax=effective_cost,
            markup=resolved_markup,
            calculation=calculation,
        )

    def reprice(self, line_item: InvoiceLineItem) -> LinePricing:
        """Recompute the derived fields of ``line_item`` from its current category."""

        pricing = self.price_line(
            name=line_item.name,
            unit_cost_ex_tax=line_item.unit_cost_ex_tax,
            category=line_item.category,
            has_tax=line_item.has_tax,
        )
        apply_line_pricing(line_item, pricing)
        return pricing


def apply_line_pricing(line_item: InvoiceLineItem, pricing: LinePricing) -> None:
    line_item.detected_pack_size = pricing.pack_size
    line_item.effective_unit_cost_ex_tax = pricing.effective_unit_cost_ex_tax
    line_item.markup = pricing.markup
    line_item.sell_ex_tax = pricing.sell_ex_tax
    line_item.sell_inc_tax = pricing.sell_inc_tax
