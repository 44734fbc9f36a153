"""Catalog-wide scan for costs that look like case prices stored as unit prices.

Rules run in order and the first hit wins. Items without a positive cost and a
positive sell price are skipped. Findings are data, never exceptions.

Apply mode zeroes cost and markup of every flagged item in one batch update so
the cost gets re-established from a trusted source. That reset is a correction
of bad data, not a price move, so no price history is written for it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from enum import StrEnum
from typing import TYPE_CHECKING

from pricebook.domain.model import ZERO

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from uuid import UUID

    from pricebook.domain.model import Item
    from pricebook.domain.ports import CatalogUnitOfWork

log = logging.getLogger(__name__)


class AnomalyRule(StrEnum):
    COST_EXCEEDS_SELL = "cost_exceeds_sell"
    LOW_MARGIN = "low_margin"
    COST_CEILING = "cost_ceiling"
    HIGH_COST_THIN_MARGIN = "high_cost_thin_margin"
    CASE_PRICE_PAIR = "case_price_pair"


class ScanMode(StrEnum):
    DRY_RUN = "dry_run"
    APPLY = "apply"


@dataclass(frozen=True, slots=True)
class AnomalyThresholds:
    """Tunable limits of the scanner rules. Margins are fractions of sell price."""

    min_margin: Decimal = Decimal("0.10")
    cost_ceiling: Decimal = Decimal(20)
    thin_margin_cost: Decimal = Decimal(15)
    thin_margin: Decimal = Decimal("0.50")
    case_sell_inc_tax: Decimal = Decimal(50)
    case_cost: Decimal = Decimal(10)


@dataclass(frozen=True, slots=True)
class CostAnomaly:
    item_id: UUID
    name: str
    vendor_id: UUID | None
    cost_ex_tax: Decimal
    sell_ex_tax: Decimal
    sell_inc_tax: Decimal
    margin: Decimal
    rule: AnomalyRule
    reason: str


@dataclass(frozen=True, slots=True)
class ScanResult:
    mode: ScanMode
    total_items: int
    flagged_items: tuple[CostAnomaly, ...]
    fixed_count: int = 0


def _percent(margin: Decimal) -> str:
    return f"{margin * 100:.1f}%"


def _money(amount: Decimal) -> str:
    return f"${amount:.2f}"


def classify_item(
    item: Item, thresholds: AnomalyThresholds = AnomalyThresholds()
) -> CostAnomaly | None:
    """Return the first rule ``item`` violates, or ``None`` when it looks plausible."""

    pricing = item.pricing
    cost = pricing.cost_ex_tax
    sell_ex = pricing.sell_ex_tax
    sell_inc = pricing.sell_inc_tax
    if cost <= ZERO or sell_ex <= ZERO:
        return None

    margin = (sell_ex - cost) / sell_ex
    finding: tuple[AnomalyRule, str] | None = None
    if cost >= sell_ex:
        finding = (
            AnomalyRule.COST_EXCEEDS_SELL,
            f"cost exceeds sell price ({_money(cost)} >= {_money(sell_ex)})",
        )
    elif margin < thresholds.min_margin:
        finding = (AnomalyRule.LOW_MARGIN, f"margin suspiciously low ({_percent(margin)})")
    elif cost > thresholds.cost_ceiling:
        finding = (
            AnomalyRule.COST_CEILING,
            f"cost exceeds plausible per-unit ceiling ({_money(cost)} > "
            f"{_money(thresholds.cost_ceiling)})",
        )
    elif cost > thresholds.thin_margin_cost and margin < thresholds.thin_margin:
        finding = (
            AnomalyRule.HIGH_COST_THIN_MARGIN,
            f"high cost with thin margin ({_money(cost)} at {_percent(margin)})",
        )
    elif sell_inc > thresholds.case_sell_inc_tax and cost > thresholds.case_cost:
        finding = (
            AnomalyRule.CASE_PRICE_PAIR,
            f"both sell and cost look like case prices ({_money(sell_inc)} / {_money(cost)})",
        )

    if finding is None:
        return None
    rule, reason = finding
    return CostAnomaly(
        item_id=item.id,
        name=item.name,
        vendor_id=item.vendor_id,
        cost_ex_tax=cost,
        sell_ex_tax=sell_ex,
        sell_inc_tax=sell_inc,
        margin=margin,
        rule=rule,
        reason=reason,
    )


def find_cost_anomalies(
    items: Iterable[Item], thresholds: AnomalyThresholds = AnomalyThresholds()
) -> list[CostAnomaly]:
    """Classify ``items`` and return the findings, highest cost first."""

    findings: list[CostAnomaly] = []
    for item in items:
        try:
            anomaly = classify_item(item, thresholds)
        except ArithmeticError:
            log.warning("Skipping item %s with unreadable pricing", item.id, exc_info=True)
            continue
        if anomaly is not None:
            findings.append(anomaly)
    findings.sort(key=lambda anomaly: anomaly.cost_ex_tax, reverse=True)
    return findings


def scan_for_cost_anomalies(
    *,
    unit_of_work_factory: Callable[[], CatalogUnitOfWork],
    mode: ScanMode = ScanMode.DRY_RUN,
    thresholds: AnomalyThresholds = AnomalyThresholds(),
) -> ScanResult:
    """Flag implausible item costs; in apply mode also zero them in one batch."""

    with unit_of_work_factory() as uow:
        items = uow.repositories.items
        catalog = items.list_all()
        findings = find_cost_anomalies(catalog, thresholds)
        for finding in findings:
            log.warning("Item %s (%r): %s", finding.item_id, finding.name, finding.reason)

        fixed = 0
        if mode is ScanMode.APPLY and findings:
            fixed = items.reset_costs(finding.item_id for finding in findings)
            uow.commit()
            log.info("Reset cost and markup of %d flagged items", fixed)

    return ScanResult(
        mode=mode,
        total_items=len(catalog),
        flagged_items=tuple(findings),
        fixed_count=fixed,
    )
