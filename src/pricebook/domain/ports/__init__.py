"""Domain port definitions for adapters."""

from __future__ import annotations

from .persistence import (
    InvoiceRepository,
    ItemRepository,
    PriceHistoryRepository,
    Repository,
    VendorRepository,
)
from .unit_of_work import (
    CatalogRepositories,
    CatalogUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "CatalogRepositories",
    "CatalogUnitOfWork",
    "InvoiceRepository",
    "ItemRepository",
    "PriceHistoryRepository",
    "Repository",
    "RepositoryCollection",
    "UnitOfWork",
    "VendorRepository",
]
