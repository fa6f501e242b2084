"""Variants of a synced product and their per-warehouse stock."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from shelfsync.domain.errors import SyncError
from shelfsync.domain.model import DestinationRecord, EntityKind, ZeroStockPolicy

from .index import EXTERNAL_ID_FIELD

if TYPE_CHECKING:
    from collections.abc import Mapping

    from shelfsync.domain.model import DictionaryEntry, SourceVariant, StockEntry
    from shelfsync.domain.ports import DestinationStore, SourceCatalog

    from .dictionaries import DictionaryResolver
    from .index import ExternalIdIndex
    from .relations import RelationRefs
    from .summary import SyncSummary

log = getLogger(__name__)


class VariantAndStockReconciler:
    def __init__(
        self,
        *,
        source: SourceCatalog,
        store: DestinationStore,
        index: ExternalIdIndex,
        dictionaries: DictionaryResolver,
        summary: SyncSummary,
        refs: RelationRefs,
        size_label: str,
        color_label: str,
        zero_stock_policy: ZeroStockPolicy = ZeroStockPolicy.SKIP,
        page_size: int = 50,
    ) -> None:
        self._source = source
        self._store = store
        self._index = index
        self._dictionaries = dictionaries
        self._summary = summary
        self._refs = refs
        self._size_label = size_label
        self._color_label = color_label
        self._zero_stock_policy = zero_stock_policy
        self._page_size = page_size

    async def resolve(self, destination_product_id: int, source_product_id: int) -> int:
        """Create the missing variants of a product; return how many were created.

        ``destination_product_id`` is the relation id the variants link to.
        """

        variants = await self._source.list_variants(source_product_id, limit=self._page_size)
        if variants is None:
            log.warning("Variants of product %s are unavailable; skipped", source_product_id)
            self._summary.record_failed(EntityKind.VARIANT)
            return 0
        self._summary.record_rejected(EntityKind.VARIANT, variants.rejected)

        created = 0
        for variant in variants:
            try:
                if await self._reconcile_variant(destination_product_id, variant):
                    created += 1
            except SyncError as exc:
                self._summary.record_failed(EntityKind.VARIANT)
                log.warning(
                    "Variant %s of product %s failed: %s", variant.id, source_product_id, exc
                )
        return created

    async def _reconcile_variant(
        self, destination_product_id: int, variant: SourceVariant
    ) -> bool:
        if await self._index.find(EntityKind.VARIANT, variant.id) is not None:
            self._summary.record_skipped(EntityKind.VARIANT)
            log.info("Variant %s already synced", variant.id)
            return False

        size = await self._dictionary_entry(
            EntityKind.SIZE, variant.property_value(self._size_label)
        )
        color = await self._dictionary_entry(
            EntityKind.COLOR, variant.property_value(self._color_label)
        )

        stored = await self._store.create(
            EntityKind.VARIANT,
            {
                "sku": variant.effective_sku,
                EXTERNAL_ID_FIELD: variant.id,
                "product": destination_product_id,
                "size": [self._refs.to(size.internal_id)] if size else None,
                "color": [self._refs.to(color.internal_id)] if color else None,
                "price": variant.price,
            },
        )
        record = DestinationRecord(
            kind=EntityKind.VARIANT, internal_id=stored.id, external_id=variant.id
        )
        self._index.remember(record)
        self._summary.record_created(EntityKind.VARIANT)
        log.info(
            "Created variant %s (sku %s) with id %s", variant.id, variant.effective_sku, stored.id
        )

        await self._reconcile_stock(record, variant)
        return True

    async def _dictionary_entry(
        self,
        kind: EntityKind,
        name: str | None,
        *,
        extra: Mapping[str, object] | None = None,
    ) -> DictionaryEntry | None:
        try:
            return await self._dictionaries.resolve(kind, name, extra=extra)
        except SyncError as exc:
            self._summary.record_failed(kind)
            log.warning("Could not resolve %s %r: %s", kind, name, exc)
            return None

    async def _reconcile_stock(
        self, variant_record: DestinationRecord, variant: SourceVariant
    ) -> None:
        entries = await self._source.get_stock(variant.id)
        if entries is None:
            self._summary.record_failed(EntityKind.STOCK)
            log.warning("Stock of variant %s is unavailable; skipped", variant.id)
            return
        self._summary.record_rejected(EntityKind.STOCK, entries.rejected)

        for entry in entries:
            if entry.quantity <= 0 and self._zero_stock_policy is ZeroStockPolicy.SKIP:
                self._summary.record_skipped(EntityKind.STOCK)
                log.debug("No units of variant %s in %r", variant.id, entry.warehouse_name)
                continue
            await self._create_stock(variant_record, entry)

    async def _create_stock(self, variant_record: DestinationRecord, entry: StockEntry) -> None:
        store_entry = await self._dictionary_entry(
            EntityKind.STORE,
            entry.warehouse_name,
            extra={EXTERNAL_ID_FIELD: entry.warehouse_id},
        )
        if store_entry is None:
            self._summary.record_failed(EntityKind.STOCK)
            log.warning("No store for warehouse %r; stock skipped", entry.warehouse_name)
            return

        try:
            await self._store.create(
                EntityKind.STOCK,
                {
                    "product_articles": self._refs.to(variant_record.internal_id),
                    "quantity": entry.quantity,
                    "dictionary_store": store_entry.internal_id,
                },
            )
        except SyncError as exc:
            self._summary.record_failed(EntityKind.STOCK)
            log.warning(
                "Stock of variant %s in %r failed: %s",
                variant_record.external_id,
                entry.warehouse_name,
                exc,
            )
            return

        self._summary.record_created(EntityKind.STOCK)
        log.info(
            "Created stock of variant %s in %r: %s",
            variant_record.external_id,
            entry.warehouse_name,
            entry.quantity,
        )
