"""Reconciliation of invoice lines against the catalog."""

from __future__ import annotations

from .ledger import PriceHistoryLedger
from .match import DEFAULT_STRATEGIES, ItemMatch, MatchStrategy, find_matching_item
from .reconciler import ItemReconciler, ReconcileOutcome

__all__ = [
    "DEFAULT_STRATEGIES",
    "ItemMatch",
    "ItemReconciler",
    "MatchStrategy",
    "PriceHistoryLedger",
    "ReconcileOutcome",
    "find_matching_item",
]
