from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from pricebook.adapters.extraction import ExtractedInvoicePayload, LineItemPayload


def test_line_item_aliases_and_float_conversion() -> None:
    line = LineItemPayload.model_validate(
        {"name": "Quinoa", "quantity": 4, "unitCostExGst": 8.5, "hasGst": True}
    )

    assert line.unit_cost_ex_tax == Decimal("8.5")
    assert line.quantity == Decimal(4)
    assert line.is_taxable


def test_line_item_accepts_field_names() -> None:
    line = LineItemPayload.model_validate(
        {"name": "Quinoa", "quantity": "1", "unit_cost_ex_tax": "8.50", "has_tax": False}
    )

    assert line.unit_cost_ex_tax == Decimal("8.50")
    assert not line.is_taxable


@pytest.mark.parametrize(
    ("extra", "expected"),
    [
        ({}, True),
        ({"gstRate": 0}, False),
        ({"gstRate": 0.1}, True),
        ({"gstRate": 0, "hasGst": True}, True),
    ],
)
def test_tax_flag_resolution(extra: dict[str, object], expected: bool) -> None:
    line = LineItemPayload.model_validate(
        {"name": "Quinoa", "quantity": 1, "unitCostExGst": 1, **extra}
    )

    assert line.is_taxable is expected


@pytest.mark.parametrize(
    "override",
    [
        {"quantity": 0},
        {"quantity": -1},
        {"unitCostExGst": -0.01},
        {"markup": 0},
        {"name": ""},
    ],
)
def test_line_item_rejects_invalid_values(override: dict[str, object]) -> None:
    data: dict[str, object] = {"name": "Quinoa", "quantity": 1, "unitCostExGst": 1}
    data.update(override)

    with pytest.raises(ValidationError):
        LineItemPayload.model_validate(data)


def test_blank_category_becomes_none() -> None:
    line = LineItemPayload.model_validate(
        {"name": "Quinoa", "quantity": 1, "unitCostExGst": 1, "category": "  "}
    )

    assert line.category is None


def test_invoice_accepts_vendor_forms() -> None:
    as_string = ExtractedInvoicePayload.model_validate({"vendor": " Acme ", "lineItems": []})
    as_alias = ExtractedInvoicePayload.model_validate({"vendorName": "Acme", "lineItems": []})

    assert as_string.vendor.name == "Acme"
    assert as_alias.vendor.name == "Acme"


def test_invoice_date_drops_time_part() -> None:
    payload = ExtractedInvoicePayload.model_validate(
        {"vendor": "Acme", "invoiceDate": "2024-05-01T10:00:00Z", "lineItems": []}
    )

    assert payload.invoice_date == date(2024, 5, 1)


def test_invoice_requires_vendor() -> None:
    with pytest.raises(ValidationError):
        ExtractedInvoicePayload.model_validate({"vendor": "   ", "lineItems": []})
    with pytest.raises(ValidationError):
        ExtractedInvoicePayload.model_validate({"lineItems": []})
