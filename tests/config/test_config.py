from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

import pytest

from pricebook.config import (
    DEFAULT_TAX_RATE,
    ConfigurationError,
    PricingConfig,
    decimal_env_var,
    get_anomaly_thresholds,
    get_database_config,
    get_pricing_config,
    get_storage_config,
    optional_env_var,
)

if TYPE_CHECKING:
    from pathlib import Path


def test_optional_env_var_handles_blank_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "   ")
    assert optional_env_var("EXAMPLE_VAR") is None

    monkeypatch.setenv("EXAMPLE_VAR", " value ")
    assert optional_env_var("EXAMPLE_VAR") == "value"


def test_decimal_env_var(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("EXAMPLE_RATE", raising=False)
    assert decimal_env_var("EXAMPLE_RATE", Decimal("0.10")) == Decimal("0.10")

    monkeypatch.setenv("EXAMPLE_RATE", "0.15")
    assert decimal_env_var("EXAMPLE_RATE", Decimal("0.10")) == Decimal("0.15")


@pytest.mark.parametrize("raw", ["ten percent", "NaN", "-0.1"])
def test_decimal_env_var_rejects_unusable_values(
    monkeypatch: pytest.MonkeyPatch, raw: str
) -> None:
    monkeypatch.setenv("EXAMPLE_RATE", raw)

    with pytest.raises(ConfigurationError) as exc:
        decimal_env_var("EXAMPLE_RATE", Decimal("0.10"), minimum=Decimal(0))

    assert "EXAMPLE_RATE" in str(exc.value)


def test_pricing_config_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("PRICEBOOK_TAX_RATE", raising=False)
    monkeypatch.delenv("PRICEBOOK_DEFAULT_MARKUP", raising=False)

    config = get_pricing_config()

    assert config.tax_rate == DEFAULT_TAX_RATE
    assert config.rules().markups.resolve("Bulk") == Decimal("1.75")


def test_pricing_config_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PRICEBOOK_TAX_RATE", "0.15")
    monkeypatch.setenv("PRICEBOOK_DEFAULT_MARKUP", "2")

    config = get_pricing_config()
    rules = config.rules()

    assert rules.tax_rate == Decimal("0.15")
    assert rules.markups.resolve("Gardening") == Decimal("2")


def test_custom_category_markups() -> None:
    config = PricingConfig(category_markups={"Gardening": Decimal("1.3")})

    assert config.markup_resolver().resolve("Gardening") == Decimal("1.3")
    assert config.markup_resolver().resolve("Bulk") == config.default_markup


def test_anomaly_thresholds_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PRICEBOOK_COST_CEILING", "35")
    monkeypatch.delenv("PRICEBOOK_MIN_MARGIN", raising=False)

    thresholds = get_anomaly_thresholds()

    assert thresholds.cost_ceiling == Decimal(35)
    assert thresholds.min_margin == Decimal("0.10")


def test_storage_config_uses_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("PRICEBOOK_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.delenv("DATABASE_URI", raising=False)

    storage = get_storage_config()
    database = get_database_config(storage=storage)

    assert storage.resolve_data_dir() == (tmp_path / "data").resolve()
    assert database.uri == f"sqlite+pysqlite:///{(tmp_path / 'data').resolve() / 'pricebook.db'}"
    assert (tmp_path / "data").is_dir()


def test_database_uri_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URI", "postgresql+psycopg://localhost/pricebook")

    assert get_database_config().uri == "postgresql+psycopg://localhost/pricebook"
