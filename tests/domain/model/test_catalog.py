from __future__ import annotations

from decimal import Decimal

from pricebook.domain.model import ZERO, ItemPricing, PriceHistory, new_id
from tests.helpers.catalog import make_item, make_vendor


def test_trusted_cost_is_any_positive_cost() -> None:
    assert make_item("Tahini", cost="5.00").has_trusted_cost
    assert not make_item("Tahini", cost="0").has_trusted_cost


def test_apply_pricing_stamps_update() -> None:
    item = make_item("Tahini")
    assert item.updated_at is None

    item.apply_pricing(
        ItemPricing(
            cost_ex_tax=Decimal("5.00"),
            markup=Decimal("1.65"),
            sell_ex_tax=Decimal("8.25"),
            sell_inc_tax=Decimal("9.08"),
        )
    )

    assert item.pricing.sell_inc_tax == Decimal("9.08")
    assert item.updated_at is not None


def test_associate_refreshes_vendor_and_category_only() -> None:
    vendor = make_vendor()
    item = make_item("Tahini", cost="5.00", category="Groceries")

    item.associate(vendor_id=vendor.id, category="Bulk")

    assert item.vendor_id == vendor.id
    assert item.category == "Bulk"
    assert item.cost_ex_tax == Decimal("5.00")


def test_clear_cost_keeps_sell_prices() -> None:
    item = make_item("Tahini", cost="45.00", markup="1.65", sell_ex="74.25", sell_inc="81.68")

    item.clear_cost()

    assert item.cost_ex_tax == ZERO
    assert item.markup == ZERO
    assert item.sell_inc_tax == Decimal("81.68")


def test_history_snapshot_copies_current_pricing() -> None:
    item = make_item("Tahini", cost="5.00", markup="1.65", sell_ex="8.25", sell_inc="9.08")
    invoice_id = new_id()

    entry = PriceHistory.snapshot(item, source_invoice_id=invoice_id)

    assert entry.item_id == item.id
    assert entry.cost_ex_tax == Decimal("5.00")
    assert entry.sell_inc_tax == Decimal("9.08")
    assert entry.source_invoice_id == invoice_id
