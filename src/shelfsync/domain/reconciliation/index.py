"""Existence checks that make every creation idempotent."""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from shelfsync.domain.model import DestinationRecord

if TYPE_CHECKING:
    from shelfsync.domain.model import EntityKind
    from shelfsync.domain.ports import DestinationStore, StoredRecord

EXTERNAL_ID_FIELD = "keycrm_id"
NAME_FIELD = "name"


class ExternalIdIndex:
    """Find destination records by the source id they were created from.

    Hits are memoised for the lifetime of the index (one run); misses are not,
    so a record created by someone else mid-run is still found.
    """

    def __init__(self, store: DestinationStore) -> None:
        self._store = store
        self._known: dict[tuple[EntityKind, int], DestinationRecord] = {}

    async def find(self, kind: EntityKind, external_id: int) -> DestinationRecord | None:
        cached = self._known.get((kind, external_id))
        if cached is not None:
            return cached

        stored = await self._store.find_first(kind, EXTERNAL_ID_FIELD, external_id)
        if stored is None:
            return None

        record = DestinationRecord(
            kind=kind, internal_id=stored.id, external_id=external_id, existed=True
        )
        self._known[(kind, external_id)] = record
        return record

    async def find_by_name(self, kind: EntityKind, name: str) -> StoredRecord | None:
        return await self._store.find_first(kind, NAME_FIELD, name)

    def remember(self, record: DestinationRecord) -> None:
        """Register a record this run created; later lookups report it as existing."""

        if record.external_id is None:
            return
        self._known[(record.kind, record.external_id)] = replace(record, existed=True)
