"""SQLAlchemy adapter package for pricebook."""

from __future__ import annotations

from .mappings import mapper_registry, start_mappers
from .repositories import (
    SqlAlchemyInvoiceRepository,
    SqlAlchemyItemRepository,
    SqlAlchemyPriceHistoryRepository,
    SqlAlchemyVendorRepository,
)
from .unit_of_work import SqlAlchemyUnitOfWork, StartupError, shutdown, startup

__all__ = [
    "SqlAlchemyInvoiceRepository",
    "SqlAlchemyItemRepository",
    "SqlAlchemyPriceHistoryRepository",
    "SqlAlchemyUnitOfWork",
    "SqlAlchemyVendorRepository",
    "StartupError",
    "mapper_registry",
    "shutdown",
    "start_mappers",
    "startup",
]
