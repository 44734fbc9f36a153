"""Unit-of-work abstractions for coordinating repositories."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from types import TracebackType

    from pricebook.domain.ports.persistence import (
        InvoiceRepository,
        ItemRepository,
        PriceHistoryRepository,
        VendorRepository,
    )


@runtime_checkable
class RepositoryCollection(Protocol):
    """Marker protocol for groups of repositories managed together."""


@runtime_checkable
class UnitOfWork[TRepositories: RepositoryCollection](Protocol):
    """Transactional boundary around a repository collection.

    Leaving the context with an exception rolls back; nothing is committed
    unless ``commit()`` is called.
    """

    @property
    def repositories(self) -> TRepositories: ...

    def __enter__(self) -> UnitOfWork[TRepositories]: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...


@dataclass(slots=True)
class CatalogRepositories(RepositoryCollection):
    """Everything the pricing workflows read or write."""

    vendors: VendorRepository
    items: ItemRepository
    invoices: InvoiceRepository
    price_history: PriceHistoryRepository


type CatalogUnitOfWork = UnitOfWork[CatalogRepositories]
