"""Pydantic models describing the KeyCRM API payloads."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _zero_to_none(value: object) -> object:
    if value in (0, "0", ""):
        return None
    return value


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class KeyCrmBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ListResponse(KeyCrmBaseModel):
    """Paginated listing envelope; items are validated one by one."""

    data: list[dict[str, Any]]
    current_page: int | None = None
    last_page: int | None = None
    total: int | None = None


class CategoryPayload(KeyCrmBaseModel):
    id: int
    name: str
    parent_id: int | None = None

    _normalize_parent = field_validator("parent_id", mode="before")(_zero_to_none)


class ProductPayload(KeyCrmBaseModel):
    id: int
    name: str
    category_id: int | None = None

    _normalize_category = field_validator("category_id", mode="before")(_zero_to_none)


class PropertyPayload(KeyCrmBaseModel):
    name: str
    value: str | None = None

    @field_validator("value", mode="before")
    @classmethod
    def _stringify(cls, value: object) -> str | None:
        if isinstance(value, str):
            return value.strip() or None
        if isinstance(value, int | float) and not isinstance(value, bool):
            return str(value)
        # null, lists and objects carry nothing we can link to
        return None


class OfferPayload(KeyCrmBaseModel):
    id: int
    product_id: int | None = None
    sku: str | None = None
    barcode: str | None = None
    price: float | None = None
    properties: list[PropertyPayload] = Field(default_factory=list)

    _normalize_codes = field_validator("sku", "barcode", mode="before")(_blank_to_none)

    @field_validator("properties", mode="before")
    @classmethod
    def _null_properties(cls, value: object) -> object:
        return [] if value is None else value


class WarehousePayload(KeyCrmBaseModel):
    id: int
    name: str
    quantity: float = 0


class StockPayload(KeyCrmBaseModel):
    id: int
    warehouse: list[WarehousePayload] = Field(default_factory=list)
