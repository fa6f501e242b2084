"""Port for reading the source catalog."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from shelfsync.domain.model import (
        SourceCategory,
        SourceListing,
        SourceProduct,
        SourceVariant,
        StockEntry,
    )


@runtime_checkable
class SourceCatalog(Protocol):
    """Read-only access to the source CRM.

    Listing methods raise :class:`~shelfsync.domain.errors.SourceUnavailableError`
    when the listing cannot be obtained. Per-entity methods return ``None`` instead,
    so a single product or variant never stops the run. Rows that cannot be read
    are left out of a listing and counted in its ``rejected`` field.
    """

    async def list_categories(self) -> SourceListing[SourceCategory]: ...

    async def list_products(self) -> SourceListing[SourceProduct]: ...

    async def list_variants(
        self, product_id: int, *, limit: int = 50
    ) -> SourceListing[SourceVariant] | None:
        ...

    async def get_stock(self, variant_id: int) -> SourceListing[StockEntry] | None: ...
