"""Pricing configuration: tax rate and the category markup table."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import TYPE_CHECKING, Final

from pricebook.domain.pricing import DEFAULT_CATEGORY_MARKUPS, DEFAULT_MARKUP, MarkupResolver
from pricebook.domain.pricing.rules import PricingRules

from .env import decimal_env_var

if TYPE_CHECKING:
    from collections.abc import Mapping

DEFAULT_TAX_RATE: Final[Decimal] = Decimal("0.10")


@dataclass(frozen=True, slots=True)
class PricingConfig:
    tax_rate: Decimal = DEFAULT_TAX_RATE
    default_markup: Decimal = DEFAULT_MARKUP
    category_markups: Mapping[str, Decimal] = field(
        default_factory=lambda: dict(DEFAULT_CATEGORY_MARKUPS)
    )

    def markup_resolver(self) -> MarkupResolver:
        return MarkupResolver(self.category_markups, default=self.default_markup)

    def rules(self) -> PricingRules:
        return PricingRules(markups=self.markup_resolver(), tax_rate=self.tax_rate)


def get_pricing_config() -> PricingConfig:
    """Build pricing settings from ``PRICEBOOK_TAX_RATE`` and ``PRICEBOOK_DEFAULT_MARKUP``."""

    tax_rate = decimal_env_var("PRICEBOOK_TAX_RATE", DEFAULT_TAX_RATE, minimum=Decimal(0))
    default_markup = decimal_env_var(
        "PRICEBOOK_DEFAULT_MARKUP", DEFAULT_MARKUP, minimum=Decimal("0.0001")
    )
    return PricingConfig(tax_rate=tax_rate, default_markup=default_markup)
