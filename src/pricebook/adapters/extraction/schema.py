"""Pydantic models describing extraction payloads (OCR or AI produced)."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date  # noqa: TC003
from decimal import Decimal
from typing import cast

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


def _float_via_str(value: object) -> object:
    # keep the digits as printed instead of the binary approximation
    if isinstance(value, float):
        return str(value)
    return value


class ExtractionBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class VendorPayload(ExtractionBaseModel):
    name: str = Field(min_length=1)
    confidence: float | None = None

    @model_validator(mode="before")
    @classmethod
    def _accept_plain_name(cls, value: object) -> object:
        if isinstance(value, str):
            return {"name": value}
        return value

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("vendor name must not be blank")
        return stripped


class LineItemPayload(ExtractionBaseModel):
    name: str = Field(min_length=1)
    quantity: Decimal = Field(gt=0)
    unit_cost_ex_tax: Decimal = Field(alias="unitCostExGst", ge=0)
    category: str | None = None
    markup: Decimal | None = Field(default=None, gt=0)
    unit_description: str | None = Field(default=None, alias="unitDescription")
    has_tax: bool | None = Field(default=None, alias="hasGst")
    tax_rate: Decimal | None = Field(default=None, alias="gstRate", ge=0)
    raw_text: str | None = Field(default=None, alias="rawText")
    confidence: float | None = None

    _normalize_optional_text = field_validator(
        "category", "unit_description", mode="before"
    )(_blank_to_none)
    _normalize_decimals = field_validator(
        "quantity", "unit_cost_ex_tax", "markup", "tax_rate", mode="before"
    )(_float_via_str)

    @property
    def is_taxable(self) -> bool:
        """Explicit flag first, then a printed tax rate; taxable when unknown."""
        if self.has_tax is not None:
            return self.has_tax
        if self.tax_rate is not None:
            return self.tax_rate > 0
        return True


class ExtractedInvoicePayload(ExtractionBaseModel):
    vendor: VendorPayload
    invoice_number: str | None = Field(default=None, alias="invoiceNumber")
    invoice_date: date | None = Field(default=None, alias="invoiceDate")
    line_items: list[LineItemPayload] = Field(alias="lineItems")
    confidence: float | None = None

    _normalize_invoice_number = field_validator("invoice_number", mode="before")(_blank_to_none)

    @field_validator("invoice_date", mode="before")
    @classmethod
    def _date_part(cls, value: object) -> object:
        # extractors emit ISO timestamps; only the calendar date is kept
        if isinstance(value, str) and "T" in value:
            return value.split("T", 1)[0]
        return value

    @model_validator(mode="before")
    @classmethod
    def _accept_vendor_name(cls, value: object) -> object:
        if isinstance(value, Mapping):
            mapping_value = cast(Mapping[str, object], value)
            if "vendor" not in mapping_value and "vendorName" in mapping_value:
                data: dict[str, object] = dict(mapping_value)
                data["vendor"] = data.pop("vendorName")
                return data
        return value
