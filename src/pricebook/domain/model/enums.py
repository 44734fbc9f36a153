"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class InvoiceStatus(StrEnum):
    """Lifecycle of an invoice. ``POSTED`` is terminal."""

    PARSED = "PARSED"
    POSTED = "POSTED"

    @property
    def is_terminal(self) -> bool:
        return self is InvoiceStatus.POSTED


class MatchKind(StrEnum):
    """How a line item was tied to a catalog item."""

    NAME_AND_VENDOR = "name_and_vendor"
    NAME_ONLY = "name_only"


class ReconcileAction(StrEnum):
    CREATED = "created"
    UPDATED = "updated"
