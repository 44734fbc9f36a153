"""Anomaly scanner thresholds read from the environment."""

from __future__ import annotations

from decimal import Decimal

from pricebook.domain.anomalies import AnomalyThresholds

from .env import decimal_env_var

_DEFAULTS = AnomalyThresholds()


def get_anomaly_thresholds() -> AnomalyThresholds:
    """Return scanner thresholds; only the per-unit ceiling is commonly tuned."""

    return AnomalyThresholds(
        cost_ceiling=decimal_env_var(
            "PRICEBOOK_COST_CEILING", _DEFAULTS.cost_ceiling, minimum=Decimal(0)
        ),
        min_margin=decimal_env_var(
            "PRICEBOOK_MIN_MARGIN", _DEFAULTS.min_margin, minimum=Decimal(0)
        ),
    )
