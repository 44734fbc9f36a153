"""Pack-size detection from free-text product descriptions.

Detection is a prioritised rule table. Each rule owns a regular expression and an
interpretation of its match; the first rule producing a plausible pack size wins,
otherwise the line is treated as a single unit.

Count-style rules ("x12", "24pk", "pack of 6", "/12", "2 dozen") only accept values
in ``[MIN_PACK_SIZE, MAX_PACK_SIZE]``. Mass and volume suffixes are read as
multiples of one kilogram or litre: "5kg" is five units, "5000g" is also five,
while "500g" describes a single unit and is ignored.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

log = logging.getLogger(__name__)

MIN_PACK_SIZE: Final[int] = 2
MAX_PACK_SIZE: Final[int] = 100
SINGLE_UNIT: Final[int] = 1
DOZEN: Final[int] = 12
_PER_LARGER_UNIT: Final[int] = 1000

type Interpretation = Callable[[re.Match[str]], int | None]


@dataclass(frozen=True, slots=True)
class PackSizeRule:
    """One entry of the detection table."""

    name: str
    pattern: re.Pattern[str]
    interpret: Interpretation


@dataclass(frozen=True, slots=True)
class PackSizeMatch:
    rule: str
    pack_size: int
    span: tuple[int, int]


def _first_number(match: re.Match[str]) -> int:
    for group in match.groups():
        if group is not None:
            return int(group)
    return SINGLE_UNIT


def _count(match: re.Match[str]) -> int | None:
    number = _first_number(match)
    return number if MIN_PACK_SIZE <= number <= MAX_PACK_SIZE else None


def _dozens(match: re.Match[str]) -> int | None:
    dozens = _first_number(match)
    number = dozens * DOZEN
    return number if number <= MAX_PACK_SIZE else None


def _whole_units(match: re.Match[str]) -> int | None:
    return _count(match)


def _thousandths(match: re.Match[str]) -> int | None:
    number = _first_number(match)
    if number < _PER_LARGER_UNIT:
        return None
    return number // _PER_LARGER_UNIT


def _rule(name: str, pattern: str, interpret: Interpretation) -> PackSizeRule:
    return PackSizeRule(name=name, pattern=re.compile(pattern, re.IGNORECASE), interpret=interpret)


DEFAULT_RULES: Final[tuple[PackSizeRule, ...]] = (
    _rule("pack", r"\b(\d+)\s*(?:pk|pack)\b|\bpack\s*of\s*(\d+)\b", _count),
    _rule("times", r"(?<![a-z])x\s*(\d+)(?!\d)(?!\s*(?:kg|g|ml|l)\b)", _count),
    _rule("leading_times", r"\b(\d+)\s*x\s*(?=\d)", _count),
    _rule("dozen", r"\b(\d+)\s*doz(?:en)?\b|\bdozen\b", _dozens),
    _rule("per", r"/\s*(\d+)\b(?!\s*(?:kg|g|ml|l)\b)", _count),
    _rule("kilograms", r"(?<![\d.])(\d+)\s*kg\b", _whole_units),
    _rule("grams", r"(?<![\d.])(\d+)\s*g\b", _thousandths),
    _rule("litres", r"(?<![\d.])(\d+)\s*l\b", _whole_units),
    _rule("millilitres", r"(?<![\d.])(\d+)\s*ml\b", _thousandths),
)


def _describe(name: str, unit_description: str | None) -> str:
    if unit_description:
        return f"{name} {unit_description}"
    return name


def match_pack_size(
    name: str,
    unit_description: str | None = None,
    *,
    rules: Sequence[PackSizeRule] = DEFAULT_RULES,
) -> PackSizeMatch | None:
    """Return the first plausible rule match, or ``None`` for a single unit."""

    text = _describe(name, unit_description)
    for rule in rules:
        for match in rule.pattern.finditer(text):
            pack_size = rule.interpret(match)
            if pack_size is None:
                continue
            if pack_size < SINGLE_UNIT:
                log.warning(
                    "Ignoring degenerate pack size %s from rule %s in %r",
                    pack_size,
                    rule.name,
                    text,
                )
                continue
            if pack_size == SINGLE_UNIT:
                continue
            return PackSizeMatch(rule=rule.name, pack_size=pack_size, span=match.span())
    return None


def detect_pack_size(
    name: str,
    unit_description: str | None = None,
    *,
    rules: Sequence[PackSizeRule] = DEFAULT_RULES,
) -> int:
    """Number of sellable units one invoiced line represents (always >= 1)."""

    match = match_pack_size(name, unit_description, rules=rules)
    if match is None:
        return SINGLE_UNIT
    log.debug("Detected pack size %s in %r via %s", match.pack_size, name, match.rule)
    return match.pack_size


def strip_pack_size(name: str, *, rules: Sequence[PackSizeRule] = DEFAULT_RULES) -> str:
    """Remove every recognised multiplier from ``name``.

    Detection on the result yields a single unit.
    """

    stripped = name
    while (match := match_pack_size(stripped, rules=rules)) is not None:
        start, end = match.span
        stripped = f"{stripped[:start]} {stripped[end:]}"
    return " ".join(stripped.split())
