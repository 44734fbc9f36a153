from __future__ import annotations

from datetime import UTC, datetime
from decimal import Decimal

import pytest

from pricebook.domain.errors import (
    AlreadyCommittedError,
    InvoicePostedError,
    LineItemNotFoundError,
    NoLineItemsError,
)
from pricebook.domain.model import Invoice, InvoiceLineItem, InvoiceStatus, new_id
from pricebook.domain.pricing import MarkupResolver, PricingRules
from tests.helpers.catalog import make_invoice, make_line_item, make_vendor

RULES = PricingRules(markups=MarkupResolver())


def test_add_line_item_assigns_position_and_parent() -> None:
    invoice = make_invoice(make_vendor(), RULES, ("Tahini", "5.00"), ("Quinoa", "8.50"))

    assert [line.position for line in invoice.line_items] == [0, 1]
    assert all(line.invoice_id == invoice.id for line in invoice.line_items)


def test_totals_only_tax_taxable_lines() -> None:
    invoice = Invoice(vendor_id=new_id())
    invoice.add_line_item(make_line_item(RULES, "Quinoa", quantity="4", cost="8.50"))
    invoice.add_line_item(
        make_line_item(RULES, "Bananas", quantity="3", cost="2.00", has_tax=False)
    )

    invoice.recompute_totals(Decimal("0.10"))

    assert invoice.subtotal_ex_tax == Decimal("40.00")
    assert invoice.tax_amount == Decimal("3.40")
    assert invoice.total_inc_tax == Decimal("43.40")


def test_line_total_rounds_to_cents() -> None:
    line_item = InvoiceLineItem(
        name="Saffron", quantity=Decimal("0.333"), unit_cost_ex_tax=Decimal("10.00")
    )

    assert line_item.line_total_ex_tax == Decimal("3.33")


def test_remove_line_item_and_recompute() -> None:
    invoice = make_invoice(make_vendor(), RULES, ("Tahini", "5.00"), ("Quinoa", "8.50"))
    tahini = invoice.line_items[0]

    invoice.remove_line_item(tahini)
    invoice.recompute_totals(Decimal("0.10"))

    assert [line.name for line in invoice.line_items] == ["Quinoa"]
    assert invoice.subtotal_ex_tax == Decimal("8.50")
    assert invoice.total_inc_tax == Decimal("9.35")


def test_unknown_line_item_raises() -> None:
    invoice = make_invoice(make_vendor(), RULES, ("Tahini", "5.00"))
    missing = new_id()

    with pytest.raises(LineItemNotFoundError) as exc:
        invoice.line_item(missing)

    assert exc.value.code == "LINE_ITEM_NOT_FOUND"
    assert str(missing) in str(exc.value)


def test_commit_preconditions() -> None:
    empty = Invoice(vendor_id=new_id())
    with pytest.raises(NoLineItemsError):
        empty.ensure_committable()

    posted = make_invoice(make_vendor(), RULES, ("Tahini", "5.00"))
    posted.status = InvoiceStatus.POSTED
    with pytest.raises(AlreadyCommittedError) as exc:
        posted.ensure_committable()
    assert str(exc.value).startswith("ALREADY_COMMITTED: ")


def test_posted_invoice_is_read_only() -> None:
    invoice = make_invoice(make_vendor(), RULES, ("Tahini", "5.00"))
    invoice.status = InvoiceStatus.POSTED

    assert invoice.is_posted
    with pytest.raises(InvoicePostedError):
        invoice.add_line_item(make_line_item(RULES, "Quinoa"))
    with pytest.raises(InvoicePostedError):
        invoice.remove_line_item(invoice.line_items[0])


def test_append_note_builds_change_log() -> None:
    line_item = InvoiceLineItem(name="Tahini", quantity=Decimal(1), unit_cost_ex_tax=Decimal(5))

    line_item.append_note("Updated: quantity: 2", at=datetime(2024, 5, 1, 9, 30, tzinfo=UTC))
    line_item.append_note("Updated: quantity: 3", at=datetime(2024, 5, 2, 14, 5, tzinfo=UTC))

    assert line_item.notes == (
        "[2024-05-01 09:30] Updated: quantity: 2\n[2024-05-02 14:05] Updated: quantity: 3"
    )
