"""Domain primitives: money aliases and exact decimal helpers.

All monetary arithmetic goes through :class:`decimal.Decimal`. Floats are only
accepted at the boundary and are converted through their ``str`` form so the
decimal value matches what a human typed, not its binary approximation.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Final

type Money = Decimal
type Markup = Decimal
type TaxRate = Decimal
type DecimalInput = Decimal | int | float | str

ZERO: Final[Decimal] = Decimal("0")
CENT: Final[Decimal] = Decimal("0.01")
STORAGE_QUANTUM: Final[Decimal] = Decimal("0.0001")


def to_decimal(value: DecimalInput, *, field: str = "value") -> Decimal:
    """Convert ``value`` to a finite :class:`Decimal` or raise ``ValueError``."""

    if isinstance(value, bool):
        raise ValueError(f"{field} must be numeric, got {value!r}")
    try:
        if isinstance(value, Decimal):
            result = value
        elif isinstance(value, float):
            result = Decimal(str(value))
        else:
            result = Decimal(value)
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise ValueError(f"{field} must be numeric, got {value!r}") from exc
    if not result.is_finite():
        raise ValueError(f"{field} must be finite, got {value!r}")
    return result


def round_to_cents(amount: Decimal) -> Money:
    """Round to the nearest cent, halves away from zero."""

    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def quantize_for_storage(amount: Decimal) -> Decimal:
    """Round to the precision of the persisted monetary columns."""

    return amount.quantize(STORAGE_QUANTUM, rounding=ROUND_HALF_UP)


def differs_by_more_than_a_cent(a: Decimal, b: Decimal) -> bool:
    return abs(a - b) > CENT
