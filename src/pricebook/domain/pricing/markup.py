"""Category to markup resolution."""

from __future__ import annotations

import logging
from decimal import Decimal
from types import MappingProxyType
from typing import TYPE_CHECKING, Final

from pricebook.domain.model.primitives import ZERO, to_decimal

if TYPE_CHECKING:
    from collections.abc import Mapping

    from pricebook.domain.model.primitives import DecimalInput, Markup

log = logging.getLogger(__name__)

DEFAULT_MARKUP: Final[Decimal] = Decimal("1.65")

DEFAULT_CATEGORY_MARKUPS: Final[Mapping[str, Decimal]] = MappingProxyType(
    {
        "House": Decimal("1.65"),
        "Bulk": Decimal("1.75"),
        "Fruit & Veg": Decimal("1.75"),
        "Fridge & Freezer": Decimal("1.5"),
        "Naturo": Decimal("1.65"),
        "Groceries": Decimal("1.65"),
        "Drinks Fridge": Decimal("1.65"),
        "Supplements": Decimal("1.65"),
        "Personal Care": Decimal("1.65"),
        "Fresh Bread": Decimal("1.5"),
    }
)


def _key(category: str) -> str:
    return " ".join(category.split()).casefold()


class MarkupResolver:
    """Maps a category to its markup multiplier. Never fails.

    Lookup order: an explicit positive markup, the exact category, the category
    compared case- and whitespace-insensitively, then the default.
    """

    def __init__(
        self,
        markups: Mapping[str, DecimalInput] | None = None,
        *,
        default: DecimalInput = DEFAULT_MARKUP,
    ) -> None:
        table = DEFAULT_CATEGORY_MARKUPS if markups is None else markups
        self._default = to_decimal(default, field="default markup")
        if self._default <= ZERO:
            raise ValueError(f"default markup must be positive, got {default!r}")
        self._exact: dict[str, Decimal] = {}
        self._folded: dict[str, Decimal] = {}
        for category, value in table.items():
            markup = to_decimal(value, field=f"markup for {category!r}")
            if markup <= ZERO:
                log.warning("Ignoring non-positive markup %s for category %r", markup, category)
                continue
            self._exact[category] = markup
            self._folded.setdefault(_key(category), markup)

    @property
    def default(self) -> Markup:
        return self._default

    def resolve(self, category: str | None, explicit: DecimalInput | None = None) -> Markup:
        if explicit is not None:
            try:
                candidate = to_decimal(explicit, field="markup")
            except ValueError:
                log.warning("Ignoring unusable explicit markup %r", explicit)
            else:
                if candidate > ZERO:
                    return candidate
        if not category:
            return self._default
        if category in self._exact:
            return self._exact[category]
        return self._folded.get(_key(category), self._default)

    def __call__(self, category: str | None) -> Markup:
        return self.resolve(category)
