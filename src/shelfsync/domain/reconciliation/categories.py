"""Recursive reconciliation of the category forest."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from shelfsync.domain.errors import SyncError
from shelfsync.domain.model import DestinationRecord, EntityKind
from shelfsync.domain.slug import slugify

from .index import EXTERNAL_ID_FIELD

if TYPE_CHECKING:
    from collections.abc import Iterable

    from shelfsync.domain.model import SourceCategory
    from shelfsync.domain.ports import DestinationStore

    from .index import ExternalIdIndex
    from .relations import RelationRefs
    from .summary import SyncSummary

log = getLogger(__name__)


class CategoryReconciler:
    """Ensure a category and all of its ancestors exist in the destination.

    Ancestors are created before their children. A parent that cannot be
    resolved (unknown id, failed request, or a cycle back onto the current
    path) leaves the child without a parent link instead of failing it.
    """

    def __init__(
        self,
        *,
        store: DestinationStore,
        index: ExternalIdIndex,
        summary: SyncSummary,
        refs: RelationRefs,
    ) -> None:
        self._store = store
        self._index = index
        self._summary = summary
        self._refs = refs
        self._snapshot: dict[int, SourceCategory] = {}

    def load_snapshot(self, categories: Iterable[SourceCategory]) -> None:
        self._snapshot = {category.id: category for category in categories}

    async def resolve(self, external_id: int) -> DestinationRecord | None:
        return await self._resolve(external_id, path=frozenset())

    async def _resolve(
        self, external_id: int, *, path: frozenset[int]
    ) -> DestinationRecord | None:
        found = await self._index.find(EntityKind.CATEGORY, external_id)
        if found is not None:
            return found

        category = self._snapshot.get(external_id)
        if category is None:
            log.warning("Category %s is not in the source catalog", external_id)
            return None

        path = path | {external_id}
        parents: list[list[int]] = []
        if category.parent_id is not None:
            parent = await self._resolve_parent(category, path=path)
            if parent is not None:
                parents.append([self._refs.to(parent.internal_id)])

        stored = await self._store.create(
            EntityKind.CATEGORY,
            {
                "name": category.name,
                EXTERNAL_ID_FIELD: category.id,
                "parent_categories": parents,
                "slug": slugify(category.name),
                "collection": False,
            },
        )
        record = DestinationRecord(
            kind=EntityKind.CATEGORY, internal_id=stored.id, external_id=category.id
        )
        self._index.remember(record)
        self._summary.record_created(EntityKind.CATEGORY)
        log.info(
            "Created category %r (source %s) with id %s", category.name, category.id, stored.id
        )
        return record

    async def _resolve_parent(
        self, category: SourceCategory, *, path: frozenset[int]
    ) -> DestinationRecord | None:
        parent_id = category.parent_id
        if parent_id is None:
            return None
        if parent_id in path:
            log.warning(
                "Category %s has a cyclic parent chain through %s; creating it without a parent",
                category.id,
                parent_id,
            )
            return None
        try:
            parent = await self._resolve(parent_id, path=path)
        except SyncError as exc:
            log.warning("Parent of category %s could not be resolved: %s", category.id, exc)
            return None
        if parent is None:
            log.warning(
                "Parent %s of category %s is unavailable; creating it without a parent",
                parent_id,
                category.id,
            )
        return parent
