"""Pricing: pack-size normalisation, markup resolution and the calculator."""

from __future__ import annotations

from .calculator import PricingCalculation, calculate_pricing, validate_pricing
from .markup import DEFAULT_CATEGORY_MARKUPS, DEFAULT_MARKUP, MarkupResolver
from .pack_size import (
    DEFAULT_RULES,
    PackSizeMatch,
    PackSizeRule,
    detect_pack_size,
    match_pack_size,
    strip_pack_size,
)
from .rules import LinePricing, PricingRules, apply_line_pricing

__all__ = [
    "DEFAULT_CATEGORY_MARKUPS",
    "DEFAULT_MARKUP",
    "DEFAULT_RULES",
    "LinePricing",
    "MarkupResolver",
    "PackSizeMatch",
    "PackSizeRule",
    "PricingCalculation",
    "PricingRules",
    "apply_line_pricing",
    "calculate_pricing",
    "detect_pack_size",
    "match_pack_size",
    "strip_pack_size",
    "validate_pricing",
]
