from __future__ import annotations

from decimal import Decimal

import pytest

from pricebook.domain.model import InvoiceLineItem
from pricebook.domain.pricing import MarkupResolver, PricingRules


def _rules() -> PricingRules:
    return PricingRules(markups=MarkupResolver(), tax_rate=Decimal("0.10"))


def test_price_line_combines_pack_size_markup_and_calculator() -> None:
    pricing = _rules().price_line(
        name="Coconut Water x12", unit_cost_ex_tax="36.00", category="Groceries"
    )

    assert pricing.pack_size == 12
    assert pricing.effective_unit_cost_ex_tax == Decimal("3.0000")
    assert pricing.markup == Decimal("1.65")
    assert pricing.sell_ex_tax == Decimal("4.95")
    assert pricing.sell_inc_tax == Decimal("5.45")

    item_pricing = pricing.item_pricing()
    assert item_pricing.cost_ex_tax == Decimal("3.00")
    assert item_pricing.sell_inc_tax == Decimal("5.45")


def test_effective_cost_keeps_storage_precision() -> None:
    pricing = _rules().price_line(name="Rolls /12", unit_cost_ex_tax="10.00", category=None)

    assert pricing.effective_unit_cost_ex_tax == Decimal("0.8333")
    assert pricing.markup == Decimal("1.65")


def test_tax_free_line_has_no_tax() -> None:
    pricing = _rules().price_line(
        name="Bananas", unit_cost_ex_tax="2.00", category="Fruit & Veg", has_tax=False
    )

    assert pricing.sell_ex_tax == Decimal("3.50")
    assert pricing.sell_inc_tax == Decimal("3.50")


def test_explicit_markup_overrides_category() -> None:
    pricing = _rules().price_line(
        name="Tahini", unit_cost_ex_tax="5.00", category="Groceries", markup="2"
    )

    assert pricing.markup == Decimal("2")
    assert pricing.sell_ex_tax == Decimal("10.00")


def test_reprice_uses_current_category() -> None:
    line_item = InvoiceLineItem(
        name="Brown Rice", quantity=Decimal(1), unit_cost_ex_tax=Decimal("10.00"), category="Bulk"
    )

    pricing = _rules().reprice(line_item)

    assert pricing.markup == Decimal("1.75")
    assert line_item.markup == Decimal("1.75")
    assert line_item.detected_pack_size == 1
    assert line_item.effective_unit_cost_ex_tax == Decimal("10.0000")
    assert line_item.sell_ex_tax == Decimal("17.50")
    assert line_item.sell_inc_tax == Decimal("19.25")


def test_tiny_cost_is_not_split_down_to_zero(caplog: pytest.LogCaptureFixture) -> None:
    pricing = _rules().price_line(name="Rolls /12", unit_cost_ex_tax="0.0001", category=None)

    assert pricing.pack_size == 1
    assert pricing.effective_unit_cost_ex_tax == Decimal("0.0001")
    assert pricing.calculation.effective_cost_ex_tax is None
    assert "would round to zero" in caplog.text
