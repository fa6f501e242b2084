"""Catalog entities shared by the source and destination sides."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator


class EntityKind(StrEnum):
    CATEGORY = "category"
    PRODUCT = "product"
    VARIANT = "variant"
    STOCK = "stock"
    SIZE = "size"
    COLOR = "color"
    STORE = "store"


DICTIONARY_KINDS = frozenset({EntityKind.SIZE, EntityKind.COLOR, EntityKind.STORE})


@dataclass(frozen=True, slots=True)
class SourceCategory:
    id: int
    name: str
    parent_id: int | None = None


@dataclass(frozen=True, slots=True)
class SourceProduct:
    id: int
    name: str
    category_id: int | None = None


@dataclass(frozen=True, slots=True)
class VariantProperty:
    name: str
    value: str | None = None


@dataclass(frozen=True, slots=True)
class SourceVariant:
    """A sellable offer of a product."""

    id: int
    sku: str | None = None
    barcode: str | None = None
    price: float | None = None
    properties: tuple[VariantProperty, ...] = field(default_factory=tuple)

    @property
    def effective_sku(self) -> str | None:
        return self.sku or self.barcode or None

    def property_value(self, label: str) -> str | None:
        """First non-empty property value whose name matches ``label`` case-insensitively."""

        wanted = label.casefold()
        for prop in self.properties:
            if prop.value is not None and prop.name.casefold() == wanted:
                return prop.value
        return None


@dataclass(frozen=True, slots=True)
class StockEntry:
    warehouse_id: int
    warehouse_name: str
    quantity: int


@dataclass(frozen=True, slots=True)
class SourceListing[ItemT]:
    """Entities read from the source, plus how many malformed rows were left out."""

    items: list[ItemT] = field(default_factory=list)
    rejected: int = 0

    def __iter__(self) -> Iterator[ItemT]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


@dataclass(frozen=True, slots=True)
class DestinationRecord:
    kind: EntityKind
    internal_id: int
    external_id: int | None = None
    existed: bool = False


@dataclass(frozen=True, slots=True)
class DictionaryEntry:
    kind: EntityKind
    internal_id: int
    name: str
    key: str | None = None
    external_id: int | None = None
    hex: str | None = None


class ZeroStockPolicy(StrEnum):
    """What to do with a warehouse row reporting zero units."""

    SKIP = "skip"
    CREATE = "create"
