"""Tiered strategies tying an invoice line to an existing catalog item."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from pricebook.domain.model import MatchKind

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from uuid import UUID

    from pricebook.domain.model import Item
    from pricebook.domain.ports import ItemRepository


@dataclass(frozen=True, slots=True)
class ItemMatch:
    item: Item
    kind: MatchKind


@dataclass(frozen=True, slots=True)
class MatchStrategy:
    """A single lookup returning an item or ``None``."""

    kind: MatchKind
    find: Callable[[ItemRepository, str, UUID | None], Item | None]


def _by_name_and_vendor(items: ItemRepository, name: str, vendor_id: UUID | None) -> Item | None:
    if vendor_id is None:
        return None
    return items.first_by_name_and_vendor(name, vendor_id)


def _by_name(items: ItemRepository, name: str, vendor_id: UUID | None) -> Item | None:
    _ = vendor_id
    return items.first_by_name(name)


DEFAULT_STRATEGIES: Final[tuple[MatchStrategy, ...]] = (
    MatchStrategy(MatchKind.NAME_AND_VENDOR, _by_name_and_vendor),
    MatchStrategy(MatchKind.NAME_ONLY, _by_name),
)


def find_matching_item(
    items: ItemRepository,
    name: str,
    vendor_id: UUID | None,
    *,
    strategies: Sequence[MatchStrategy] = DEFAULT_STRATEGIES,
) -> ItemMatch | None:
    """Run ``strategies`` in order and stop at the first hit."""

    for strategy in strategies:
        item = strategy.find(items, name, vendor_id)
        if item is not None:
            return ItemMatch(item=item, kind=strategy.kind)
    return None
