"""Driver for one catalog sync run.

Categories are reconciled first, then products (each cascading into its
variants and stock). Everything is awaited in sequence: existence checks are the
only guard against duplicates, so sibling entities are never created
concurrently.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING, Protocol

from shelfsync.config.sync import SyncConfig
from shelfsync.domain.errors import SyncError
from shelfsync.domain.model import EntityKind

from .categories import CategoryReconciler
from .dictionaries import DictionaryResolver
from .index import ExternalIdIndex
from .products import ProductReconciler
from .relations import RelationRefs
from .summary import SyncSummary
from .variants import VariantAndStockReconciler

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Sequence

    from shelfsync.domain.model import DestinationRecord
    from shelfsync.domain.ports import DestinationStore, SourceCatalog

    Sleep = Callable[[float], Awaitable[None]]

log = getLogger(__name__)


class SyncScope(StrEnum):
    ALL = "all"
    CATEGORIES = "categories"
    PRODUCTS = "products"


class _SourceEntity(Protocol):
    @property
    def id(self) -> int: ...

    @property
    def name(self) -> str: ...


@dataclass(slots=True)
class CatalogSynchronizer:
    source: SourceCatalog
    store: DestinationStore
    config: SyncConfig = field(default_factory=SyncConfig)
    sleep: Sleep = asyncio.sleep

    async def run(self, scope: SyncScope = SyncScope.ALL) -> SyncSummary:
        """Reconcile the source catalog into the store.

        Raises :class:`~shelfsync.domain.errors.SourceUnavailableError` when a
        top-level listing cannot be fetched; every other failure is counted in the
        returned summary.
        """

        summary = SyncSummary()
        index = ExternalIdIndex(self.store)
        refs = RelationRefs(self.config.relation_id_offset)
        dictionaries = DictionaryResolver(store=self.store, index=index, summary=summary)
        categories = CategoryReconciler(
            store=self.store, index=index, summary=summary, refs=refs
        )
        variants = VariantAndStockReconciler(
            source=self.source,
            store=self.store,
            index=index,
            dictionaries=dictionaries,
            summary=summary,
            refs=refs,
            size_label=self.config.size_label,
            color_label=self.config.color_label,
            zero_stock_policy=self.config.zero_stock_policy,
            page_size=self.config.variant_page_size,
        )
        products = ProductReconciler(
            store=self.store,
            index=index,
            categories=categories,
            variants=variants,
            summary=summary,
            refs=refs,
            currency_id=self.config.currency_id,
        )

        # Needed for products too: their category links materialise ancestors.
        source_categories = await self.source.list_categories()
        categories.load_snapshot(source_categories)
        log.info("Fetched %s categories from the source", len(source_categories))

        if scope in (SyncScope.ALL, SyncScope.CATEGORIES):
            summary.record_rejected(EntityKind.CATEGORY, source_categories.rejected)
            await self._reconcile_each(
                source_categories.items,
                EntityKind.CATEGORY,
                lambda category: categories.resolve(category.id),
                summary,
            )

        if scope in (SyncScope.ALL, SyncScope.PRODUCTS):
            source_products = await self.source.list_products()
            log.info("Fetched %s products from the source", len(source_products))
            summary.record_rejected(EntityKind.PRODUCT, source_products.rejected)
            await self._reconcile_each(
                source_products.items, EntityKind.PRODUCT, products.resolve, summary
            )

        for line in summary.lines():
            log.info("Sync summary %s", line)
        return summary

    async def _reconcile_each[EntityT: _SourceEntity](
        self,
        entities: Sequence[EntityT],
        kind: EntityKind,
        reconcile: Callable[[EntityT], Awaitable[DestinationRecord | None]],
        summary: SyncSummary,
    ) -> None:
        batch_size = max(self.config.batch_size, 1)
        for position, entity in enumerate(entities, start=1):
            try:
                record = await reconcile(entity)
            except SyncError as exc:
                summary.record_failed(kind)
                log.warning(
                    "Failed to sync %s %r (source %s): %s", kind, entity.name, entity.id, exc
                )
            else:
                if record is None:
                    summary.record_failed(kind)
                    log.warning("Could not sync %s %r (source %s)", kind, entity.name, entity.id)
                elif record.existed:
                    summary.record_skipped(kind)
                    log.info(
                        "Skipped %s %r (source %s): already synced", kind, entity.name, entity.id
                    )

            if position % batch_size == 0 and position < len(entities):
                log.debug(
                    "Pausing %.1fs after %s %s(s)", self.config.batch_pause_seconds, position, kind
                )
                await self.sleep(self.config.batch_pause_seconds)
