"""Translate KeyCRM payloads into catalog entities."""

from __future__ import annotations

from typing import TYPE_CHECKING

from shelfsync.domain.model import (
    SourceCategory,
    SourceProduct,
    SourceVariant,
    StockEntry,
    VariantProperty,
)

if TYPE_CHECKING:
    from .schema import CategoryPayload, OfferPayload, ProductPayload, WarehousePayload


def to_category(payload: CategoryPayload) -> SourceCategory:
    return SourceCategory(id=payload.id, name=payload.name, parent_id=payload.parent_id)


def to_product(payload: ProductPayload) -> SourceProduct:
    return SourceProduct(id=payload.id, name=payload.name, category_id=payload.category_id)


def to_variant(payload: OfferPayload) -> SourceVariant:
    return SourceVariant(
        id=payload.id,
        sku=payload.sku,
        barcode=payload.barcode,
        price=payload.price,
        properties=tuple(
            VariantProperty(name=prop.name, value=prop.value) for prop in payload.properties
        ),
    )


def to_stock_entry(payload: WarehousePayload) -> StockEntry:
    # fractional and negative (oversold) balances are not stock we can publish
    return StockEntry(
        warehouse_id=payload.id,
        warehouse_name=payload.name,
        quantity=max(int(payload.quantity), 0),
    )
