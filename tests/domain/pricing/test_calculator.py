from __future__ import annotations

from decimal import Decimal

import pytest

from pricebook.domain.pricing import PricingCalculation, calculate_pricing, validate_pricing


def test_rounds_half_up_to_cents() -> None:
    calculation = calculate_pricing(Decimal("8.50"), Decimal("1.65"), 1, Decimal("0.10"))

    assert calculation.cost_ex_tax == Decimal("8.50")
    assert calculation.markup == Decimal("1.65")
    assert calculation.sell_ex_tax == Decimal("14.03")
    assert calculation.tax_amount == Decimal("1.40")
    assert calculation.sell_inc_tax == Decimal("15.43")
    assert calculation.effective_cost_ex_tax is None
    assert validate_pricing(calculation) == []


def test_pack_size_converts_case_cost_to_unit_cost() -> None:
    calculation = calculate_pricing("36.00", "1.65", 12)

    assert calculation.effective_cost_ex_tax == Decimal("3.00")
    assert calculation.unit_cost_ex_tax == Decimal("3.00")
    assert calculation.sell_ex_tax == Decimal("4.95")
    assert calculation.sell_inc_tax == Decimal("5.45")


def test_floats_are_read_as_printed() -> None:
    calculation = calculate_pricing(8.5, 1.65)

    assert calculation.sell_ex_tax == Decimal("14.03")


@pytest.mark.parametrize(
    ("cost", "markup", "pack_size", "tax_rate"),
    [
        ("0.01", "1.01", 1, "0.10"),
        ("1.005", "1.5", 1, "0.10"),
        ("19.99", "1.75", 3, "0.15"),
        ("123.45", "2.2", 7, "0"),
        ("2.49", "1.65", 100, "0.125"),
    ],
)
def test_inclusive_price_is_exact_sum(
    cost: str, markup: str, pack_size: int, tax_rate: str
) -> None:
    first = calculate_pricing(cost, markup, pack_size, tax_rate)
    second = calculate_pricing(cost, markup, pack_size, tax_rate)

    assert first == second
    assert first.sell_inc_tax == first.sell_ex_tax + first.tax_amount
    assert first.sell_inc_tax == first.sell_inc_tax.quantize(Decimal("0.01"))


def test_zero_tax_rate() -> None:
    calculation = calculate_pricing("10", "1.5", tax_rate=0)

    assert calculation.tax_amount == Decimal("0.00")
    assert calculation.sell_inc_tax == calculation.sell_ex_tax == Decimal("15.00")


@pytest.mark.parametrize("pack_size", [0, -3, 1.5, True])
def test_rejects_invalid_pack_size(pack_size: object) -> None:
    with pytest.raises(ValueError, match="pack_size"):
        calculate_pricing("1", "1.5", pack_size)  # type: ignore[arg-type]


def test_rejects_negative_tax_rate() -> None:
    with pytest.raises(ValueError, match="tax_rate"):
        calculate_pricing("1", "1.5", 1, "-0.1")


@pytest.mark.parametrize("cost", ["abc", "NaN", "Infinity", None])
def test_rejects_non_numeric_input(cost: object) -> None:
    with pytest.raises(ValueError, match="cost_ex_tax"):
        calculate_pricing(cost, "1.5")  # type: ignore[arg-type]


def test_validation_reports_every_violation() -> None:
    calculation = calculate_pricing("0", "0")

    assert validate_pricing(calculation) == [
        "Cost ex tax must be positive",
        "Markup must be positive",
        "Sell price ex tax must be greater than cost",
    ]


def test_validation_detects_inconsistent_tax() -> None:
    calculation = PricingCalculation(
        cost_ex_tax=Decimal("5.00"),
        markup=Decimal("2"),
        sell_ex_tax=Decimal("10.00"),
        tax_amount=Decimal("1.00"),
        sell_inc_tax=Decimal("11.50"),
    )

    assert validate_pricing(calculation) == ["Tax calculation is inconsistent"]


def test_validation_compares_sell_price_with_unit_cost() -> None:
    # a case of 12 at $36 sells each unit for $4.95, above the $3.00 unit cost
    calculation = calculate_pricing("36.00", "1.65", 12)

    assert validate_pricing(calculation) == []
