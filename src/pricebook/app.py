"""Application entry points wiring configuration, storage and domain services."""

from __future__ import annotations

from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from pricebook.adapters.extraction import (
    ExtractedInvoicePayload,
    parse_extracted_invoice,
    to_invoice_draft,
)
from pricebook.adapters.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork, is_started, startup
from pricebook.config import get_anomaly_thresholds, get_pricing_config
from pricebook.domain import anomalies, intake, invoices, items
from pricebook.domain.errors import ItemNotFoundError
from pricebook.domain.ports.unit_of_work import CatalogUnitOfWork

if TYPE_CHECKING:
    from collections.abc import Mapping
    from uuid import UUID

    from pricebook.config import PricingConfig
    from pricebook.domain.anomalies import AnomalyThresholds, ScanMode, ScanResult
    from pricebook.domain.invoices import CommitInvoiceResult
    from pricebook.domain.model import DecimalInput, Invoice, InvoiceLineItem, PriceHistory

UnitOfWorkFactory = Callable[[], CatalogUnitOfWork]


log = getLogger(__name__)


def _unit_of_work(factory: UnitOfWorkFactory | None) -> UnitOfWorkFactory:
    if factory is not None:
        return factory
    if not is_started():
        startup()
    return SqlAlchemyUnitOfWork


def commit_invoice(
    invoice_id: UUID,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> CommitInvoiceResult:
    """Post a parsed invoice into the catalog."""

    log.info("Committing invoice %s", invoice_id)
    return invoices.commit_invoice(
        invoice_id, unit_of_work_factory=_unit_of_work(unit_of_work_factory)
    )


def scan_for_cost_anomalies(
    *,
    mode: ScanMode = anomalies.ScanMode.DRY_RUN,
    thresholds: AnomalyThresholds | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> ScanResult:
    """Run the anomaly scanner with thresholds from the environment unless given."""

    effective_thresholds = thresholds or get_anomaly_thresholds()
    log.info("Starting cost anomaly scan (%s)", mode)
    result = anomalies.scan_for_cost_anomalies(
        unit_of_work_factory=_unit_of_work(unit_of_work_factory),
        mode=mode,
        thresholds=effective_thresholds,
    )
    log.info(
        "Finished cost anomaly scan: total=%s, flagged=%s, fixed=%s",
        result.total_items,
        len(result.flagged_items),
        result.fixed_count,
    )
    return result


def import_extracted_invoice(
    payload: ExtractedInvoicePayload | Mapping[str, object] | str | bytes,
    *,
    raw_document: bytes | None = None,
    pricing: PricingConfig | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> Invoice:
    """Validate an extraction payload and record it as a parsed invoice."""

    validated = (
        payload
        if isinstance(payload, ExtractedInvoicePayload)
        else parse_extracted_invoice(payload)
    )
    draft = to_invoice_draft(validated, raw_document=raw_document)
    effective_pricing = pricing or get_pricing_config()
    return intake.record_invoice(
        draft,
        unit_of_work_factory=_unit_of_work(unit_of_work_factory),
        rules=effective_pricing.rules(),
    )


def update_line_item(
    invoice_id: UUID,
    line_item_id: UUID,
    *,
    quantity: DecimalInput | None = None,
    unit_cost_ex_tax: DecimalInput | None = None,
    category: str | None = None,
    notes: str | None = None,
    pricing: PricingConfig | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> InvoiceLineItem:
    effective_pricing = pricing or get_pricing_config()
    return invoices.update_line_item(
        invoice_id,
        line_item_id,
        unit_of_work_factory=_unit_of_work(unit_of_work_factory),
        rules=effective_pricing.rules(),
        quantity=quantity,
        unit_cost_ex_tax=unit_cost_ex_tax,
        category=category,
        notes=notes,
    )


def delete_line_item(
    invoice_id: UUID,
    line_item_id: UUID,
    *,
    pricing: PricingConfig | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> Invoice:
    effective_pricing = pricing or get_pricing_config()
    return invoices.delete_line_item(
        invoice_id,
        line_item_id,
        unit_of_work_factory=_unit_of_work(unit_of_work_factory),
        rules=effective_pricing.rules(),
    )


def delete_invoice(
    invoice_id: UUID,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> None:
    invoices.delete_invoice(invoice_id, unit_of_work_factory=_unit_of_work(unit_of_work_factory))


def get_price_history(
    item_id: UUID,
    *,
    limit: int | None = items.DEFAULT_HISTORY_LIMIT,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> list[PriceHistory]:
    return items.get_price_history(
        item_id, unit_of_work_factory=_unit_of_work(unit_of_work_factory), limit=limit
    )


def check_item_pricing(
    item_id: UUID,
    *,
    pricing: PricingConfig | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> list[str]:
    """Validate the stored prices of one item; an empty list means consistent."""

    effective_pricing = pricing or get_pricing_config()
    with _unit_of_work(unit_of_work_factory)() as uow:
        item = uow.repositories.items.get(item_id)
        if item is None:
            raise ItemNotFoundError(item_id)
        return items.check_item_pricing(item, effective_pricing.tax_rate)
