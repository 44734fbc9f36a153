"""Invoice services: committing to the catalog and editing while still parsed."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pricebook.domain.errors import AlreadyCommittedError, InvoiceNotFoundError
from pricebook.domain.model import ZERO, ReconcileAction, to_decimal
from pricebook.domain.reconciliation import DEFAULT_STRATEGIES, ItemReconciler

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from decimal import Decimal
    from uuid import UUID

    from pricebook.domain.model import DecimalInput, Invoice, InvoiceLineItem
    from pricebook.domain.ports import CatalogUnitOfWork, InvoiceRepository
    from pricebook.domain.pricing import PricingRules
    from pricebook.domain.reconciliation import MatchStrategy, ReconcileOutcome

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CommitInvoiceResult:
    """Outcome of committing one invoice."""

    invoice: Invoice
    items_created: int
    items_updated: int
    price_changes: int
    outcomes: tuple[ReconcileOutcome, ...] = ()


def commit_invoice(
    invoice_id: UUID,
    *,
    unit_of_work_factory: Callable[[], CatalogUnitOfWork],
    strategies: Sequence[MatchStrategy] = DEFAULT_STRATEGIES,
) -> CommitInvoiceResult:
    """Reconcile every line of a parsed invoice and post it, all or nothing.

    Raises ``InvoiceNotFoundError``, ``AlreadyCommittedError`` or ``NoLineItemsError``.
    Any failure rolls the whole unit of work back and leaves the invoice parsed.
    """

    with unit_of_work_factory() as uow:
        repositories = uow.repositories
        invoice = repositories.invoices.get_for_update(invoice_id)
        if invoice is None:
            raise InvoiceNotFoundError(invoice_id)
        invoice.ensure_committable()

        reconciler = ItemReconciler(
            repositories.items, repositories.price_history, strategies=strategies
        )
        outcomes = tuple(
            reconciler.reconcile(line_item, vendor_id=invoice.vendor_id, invoice_id=invoice.id)
            for line_item in invoice.line_items
        )

        if not repositories.invoices.mark_posted(invoice):
            raise AlreadyCommittedError(invoice.id)
        uow.commit()

    result = CommitInvoiceResult(
        invoice=invoice,
        items_created=sum(1 for o in outcomes if o.action is ReconcileAction.CREATED),
        items_updated=sum(1 for o in outcomes if o.action is ReconcileAction.UPDATED),
        price_changes=sum(1 for o in outcomes if o.price_changed),
        outcomes=outcomes,
    )
    log.info(
        "Posted invoice %s: %d created, %d updated, %d price changes",
        invoice.id,
        result.items_created,
        result.items_updated,
        result.price_changes,
    )
    return result


def _load(invoices: InvoiceRepository, invoice_id: UUID) -> Invoice:
    invoice = invoices.get(invoice_id)
    if invoice is None:
        raise InvoiceNotFoundError(invoice_id)
    return invoice


def _positive(value: DecimalInput, field: str) -> Decimal:
    number = to_decimal(value, field=field)
    if number <= ZERO:
        raise ValueError(f"{field} must be positive, got {value!r}")
    return number


def update_line_item(
    invoice_id: UUID,
    line_item_id: UUID,
    *,
    unit_of_work_factory: Callable[[], CatalogUnitOfWork],
    rules: PricingRules,
    quantity: DecimalInput | None = None,
    unit_cost_ex_tax: DecimalInput | None = None,
    category: str | None = None,
    notes: str | None = None,
) -> InvoiceLineItem:
    """Edit a line of a parsed invoice, re-pricing it and refreshing invoice totals.

    Without explicit ``notes`` a timestamped summary of the change is appended to
    the line's notes; explicit ``notes`` replace them.
    """

    new_quantity = _positive(quantity, "quantity") if quantity is not None else None
    new_cost = (
        _positive(unit_cost_ex_tax, "unit_cost_ex_tax") if unit_cost_ex_tax is not None else None
    )

    with unit_of_work_factory() as uow:
        invoice = _load(uow.repositories.invoices, invoice_id)
        invoice.ensure_editable()
        line_item = invoice.line_item(line_item_id)

        changes: list[str] = []
        if category is not None:
            line_item.category = category
            changes.append(f"category: {category}")
        if new_quantity is not None:
            line_item.quantity = new_quantity
            changes.append(f"quantity: {new_quantity}")
        if new_cost is not None:
            line_item.unit_cost_ex_tax = new_cost
            changes.append(f"unit cost: ${new_cost}")

        if changes:
            pricing = rules.reprice(line_item)
            changes.append(
                f"sell price updated: ${pricing.sell_ex_tax} ex tax, "
                f"${pricing.sell_inc_tax} inc tax"
            )
            invoice.recompute_totals(rules.tax_rate)

        if notes is not None:
            line_item.notes = notes
        elif changes:
            line_item.append_note(f"Updated: {', '.join(changes)}")

        uow.commit()

    log.info("Updated line item %s on invoice %s", line_item_id, invoice_id)
    return line_item


def delete_line_item(
    invoice_id: UUID,
    line_item_id: UUID,
    *,
    unit_of_work_factory: Callable[[], CatalogUnitOfWork],
    rules: PricingRules,
) -> Invoice:
    """Remove a line from a parsed invoice and recompute the invoice totals."""

    with unit_of_work_factory() as uow:
        invoice = _load(uow.repositories.invoices, invoice_id)
        line_item = invoice.line_item(line_item_id)
        invoice.remove_line_item(line_item)
        invoice.recompute_totals(rules.tax_rate)
        uow.commit()

    log.info("Deleted line item %s from invoice %s", line_item_id, invoice_id)
    return invoice


def delete_invoice(
    invoice_id: UUID,
    *,
    unit_of_work_factory: Callable[[], CatalogUnitOfWork],
) -> None:
    """Delete a parsed invoice with its lines. Posted invoices are permanent."""

    with unit_of_work_factory() as uow:
        invoices = uow.repositories.invoices
        invoice = _load(invoices, invoice_id)
        invoice.ensure_editable()
        invoices.delete(invoice)
        uow.commit()

    log.info("Deleted invoice %s", invoice_id)
