"""Environment variable loaders for configuration."""

from __future__ import annotations

import os
from decimal import Decimal, InvalidOperation

from .errors import ConfigurationError


def optional_env_var(name: str) -> str | None:
    """Return the stripped value of ``name`` or ``None`` when absent/blank."""

    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def decimal_env_var(name: str, default: Decimal, *, minimum: Decimal | None = None) -> Decimal:
    """Read a decimal environment variable, falling back to ``default``."""

    raw = optional_env_var(name)
    if raw is None:
        return default
    try:
        value = Decimal(raw)
    except InvalidOperation as exc:
        raise ConfigurationError(f"{name} must be a decimal number, got {raw!r}") from exc
    if not value.is_finite():
        raise ConfigurationError(f"{name} must be finite, got {raw!r}")
    if minimum is not None and value < minimum:
        raise ConfigurationError(f"{name} must be >= {minimum}, got {raw!r}")
    return value
