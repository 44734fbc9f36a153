from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

import pytest

from pricebook.domain.anomalies import (
    AnomalyRule,
    AnomalyThresholds,
    ScanMode,
    classify_item,
    find_cost_anomalies,
    scan_for_cost_anomalies,
)
from pricebook.domain.model import ZERO
from tests.helpers.catalog import FakeCatalogUnitOfWork, FakeItemRepository, make_item

if TYPE_CHECKING:
    from pricebook.domain.model import Item


@pytest.mark.parametrize(
    ("cost", "sell_ex", "sell_inc", "rule"),
    [
        ("10.00", "9.00", "9.90", AnomalyRule.COST_EXCEEDS_SELL),
        ("10.00", "10.00", "11.00", AnomalyRule.COST_EXCEEDS_SELL),
        ("9.50", "10.00", "11.00", AnomalyRule.LOW_MARGIN),
        ("25.00", "30.00", "33.00", AnomalyRule.COST_CEILING),
        ("16.00", "24.00", "26.40", AnomalyRule.HIGH_COST_THIN_MARGIN),
        ("12.00", "50.00", "55.00", AnomalyRule.CASE_PRICE_PAIR),
    ],
)
def test_classify_first_rule_wins(
    cost: str, sell_ex: str, sell_inc: str, rule: AnomalyRule
) -> None:
    item = make_item("Suspicious", cost=cost, sell_ex=sell_ex, sell_inc=sell_inc)

    anomaly = classify_item(item)

    assert anomaly is not None
    assert anomaly.rule is rule
    assert anomaly.item_id == item.id


def test_case_cost_reason_mentions_ceiling() -> None:
    item = make_item("Kombucha", cost="25.00", sell_ex="30.00", sell_inc="33.00")

    anomaly = classify_item(item)

    assert anomaly is not None
    assert anomaly.reason == "cost exceeds plausible per-unit ceiling ($25.00 > $20.00)"
    assert anomaly.margin == (Decimal("30.00") - Decimal("25.00")) / Decimal("30.00")


@pytest.mark.parametrize(
    ("cost", "sell_ex", "sell_inc"),
    [
        ("3.00", "4.95", "5.45"),
        ("0", "4.95", "5.45"),
        ("3.00", "0", "0"),
        ("15.00", "30.00", "33.00"),
    ],
)
def test_plausible_or_unpriced_items_are_not_flagged(
    cost: str, sell_ex: str, sell_inc: str
) -> None:
    item = make_item("Fine", cost=cost, sell_ex=sell_ex, sell_inc=sell_inc)

    assert classify_item(item) is None


def test_thresholds_are_tunable() -> None:
    item = make_item("Kombucha", cost="25.00", sell_ex="60.00", sell_inc="66.00")

    assert classify_item(item) is not None
    relaxed = AnomalyThresholds(cost_ceiling=Decimal(30), case_cost=Decimal(30))
    assert classify_item(item, relaxed) is None


def test_findings_sorted_by_cost_descending() -> None:
    items = [
        make_item("Low", cost="9.50", sell_ex="10.00", sell_inc="11.00"),
        make_item("High", cost="45.00", sell_ex="74.25", sell_inc="81.68"),
        make_item("Fine", cost="3.00", sell_ex="4.95", sell_inc="5.45"),
    ]

    findings = find_cost_anomalies(items)

    assert [finding.name for finding in findings] == ["High", "Low"]


def _unit_of_work_with(*items: Item) -> FakeCatalogUnitOfWork:
    uow = FakeCatalogUnitOfWork()
    uow.repositories.items = FakeItemRepository(items)
    return uow


def test_dry_run_changes_nothing() -> None:
    suspicious = make_item("Kombucha", cost="45.00", sell_ex="74.25", sell_inc="81.68")
    uow = _unit_of_work_with(suspicious, make_item("Tahini", cost="3.00", sell_ex="4.95"))

    result = scan_for_cost_anomalies(unit_of_work_factory=lambda: uow)

    assert result.mode is ScanMode.DRY_RUN
    assert result.total_items == 2
    assert [finding.item_id for finding in result.flagged_items] == [suspicious.id]
    assert result.fixed_count == 0
    assert suspicious.cost_ex_tax == Decimal("45.00")
    assert uow.commits == 0


def test_apply_zeroes_cost_and_markup() -> None:
    suspicious = make_item(
        "Kombucha", cost="45.00", markup="1.65", sell_ex="74.25", sell_inc="81.68"
    )
    uow = _unit_of_work_with(suspicious)

    result = scan_for_cost_anomalies(unit_of_work_factory=lambda: uow, mode=ScanMode.APPLY)

    assert result.fixed_count == 1
    assert suspicious.cost_ex_tax == ZERO
    assert suspicious.markup == ZERO
    assert suspicious.sell_inc_tax == Decimal("81.68")
    assert uow.commits == 1
    assert uow.repositories.price_history.count_for_item(suspicious.id) == 0


def test_apply_without_findings_does_not_commit() -> None:
    uow = _unit_of_work_with(make_item("Tahini", cost="3.00", sell_ex="4.95", sell_inc="5.45"))

    result = scan_for_cost_anomalies(unit_of_work_factory=lambda: uow, mode=ScanMode.APPLY)

    assert result.fixed_count == 0
    assert uow.commits == 0
