"""Product reconciliation with category links and the variant cascade."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from shelfsync.domain.errors import SyncError
from shelfsync.domain.model import DestinationRecord, EntityKind

from .index import EXTERNAL_ID_FIELD

if TYPE_CHECKING:
    from shelfsync.domain.model import SourceProduct
    from shelfsync.domain.ports import DestinationStore

    from .categories import CategoryReconciler
    from .index import ExternalIdIndex
    from .relations import RelationRefs
    from .summary import SyncSummary
    from .variants import VariantAndStockReconciler

log = getLogger(__name__)


class ProductReconciler:
    def __init__(
        self,
        *,
        store: DestinationStore,
        index: ExternalIdIndex,
        categories: CategoryReconciler,
        variants: VariantAndStockReconciler,
        summary: SyncSummary,
        refs: RelationRefs,
        currency_id: int,
    ) -> None:
        self._store = store
        self._index = index
        self._categories = categories
        self._variants = variants
        self._summary = summary
        self._refs = refs
        self._currency_id = currency_id

    async def resolve(self, product: SourceProduct) -> DestinationRecord | None:
        """Create ``product`` unless it is already synced.

        An existing product is returned untouched; its variants are not revisited.
        """

        found = await self._index.find(EntityKind.PRODUCT, product.id)
        if found is not None:
            return found

        category_ref = await self._category_ref(product)
        stored = await self._store.create(
            EntityKind.PRODUCT,
            {
                "title": product.name,
                EXTERNAL_ID_FIELD: product.id,
                "currency": self._currency_id,
                "categories": [category_ref] if category_ref is not None else [],
            },
        )
        record = DestinationRecord(
            kind=EntityKind.PRODUCT, internal_id=stored.id, external_id=product.id
        )
        self._index.remember(record)
        self._summary.record_created(EntityKind.PRODUCT)
        log.info("Created product %r (source %s) with id %s", product.name, product.id, stored.id)

        created = await self._variants.resolve(self._refs.to(stored.id), product.id)
        log.info("Product %s: %s variant(s) created", product.id, created)
        return record

    async def _category_ref(self, product: SourceProduct) -> int | None:
        if product.category_id is None:
            return None
        try:
            category = await self._categories.resolve(product.category_id)
        except SyncError as exc:
            log.warning("Category of product %s could not be resolved: %s", product.id, exc)
            return None
        if category is None:
            log.warning(
                "Category %s of product %s is unavailable; creating it without a category",
                product.category_id,
                product.id,
            )
            return None
        return self._refs.to(category.internal_id)
