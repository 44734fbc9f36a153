"""Ports for persisting catalog and invoice records."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from pricebook.domain.model import Invoice, Item, PriceHistory, Vendor

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from uuid import UUID


@runtime_checkable
class Repository[TEntity](Protocol):
    """Minimal repository contract for a persistent record store."""

    def add(self, entity: TEntity) -> None: ...

    def get(self, entity_id: UUID) -> TEntity | None: ...


@runtime_checkable
class VendorRepository(Repository[Vendor], Protocol):
    """Persistence contract for vendors."""

    def get_by_name(self, name: str) -> Vendor | None: ...


@runtime_checkable
class ItemRepository(Repository[Item], Protocol):
    """Persistence contract for catalog items.

    Lookups by name are exact and case-sensitive and return the oldest match.
    """

    def first_by_name_and_vendor(self, name: str, vendor_id: UUID) -> Item | None: ...

    def first_by_name(self, name: str) -> Item | None: ...

    def list_all(self) -> Sequence[Item]: ...

    def reset_costs(self, item_ids: Iterable[UUID]) -> int:
        """Zero cost and markup of the given items in one statement; return rows touched."""
        ...


@runtime_checkable
class InvoiceRepository(Repository[Invoice], Protocol):
    """Persistence contract for invoices and their line items."""

    def get_for_update(self, invoice_id: UUID) -> Invoice | None:
        """Load the invoice and lock it against concurrent commits where supported."""
        ...

    def mark_posted(self, invoice: Invoice) -> bool:
        """Flip ``PARSED`` to ``POSTED`` atomically; ``False`` if another writer won."""
        ...

    def delete(self, invoice: Invoice) -> None: ...


@runtime_checkable
class PriceHistoryRepository(Protocol):
    """Append-only store for price history rows."""

    def append(self, entry: PriceHistory) -> None: ...

    def for_item(self, item_id: UUID, *, limit: int | None = None) -> Sequence[PriceHistory]:
        """Entries for ``item_id``, newest first."""
        ...

    def count_for_item(self, item_id: UUID) -> int: ...
