"""Get-or-create for the name-keyed dictionaries (sizes, colors, stores)."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from shelfsync.domain.model import DICTIONARY_KINDS, DictionaryEntry, EntityKind
from shelfsync.domain.palette import lookup_color_hex
from shelfsync.domain.slug import slugify

from .index import EXTERNAL_ID_FIELD

if TYPE_CHECKING:
    from collections.abc import Mapping

    from shelfsync.domain.ports import DestinationStore, StoredRecord

    from .index import ExternalIdIndex
    from .summary import SyncSummary

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DictionaryLayout:
    with_key: bool
    with_hex: bool = False


# The store dictionary has no slug field in the destination schema.
DICTIONARY_LAYOUTS: dict[EntityKind, DictionaryLayout] = {
    EntityKind.SIZE: DictionaryLayout(with_key=True),
    EntityKind.COLOR: DictionaryLayout(with_key=True, with_hex=True),
    EntityKind.STORE: DictionaryLayout(with_key=False),
}


class DictionaryResolver:
    """Resolve dictionary entries by name, creating them on first use."""

    def __init__(
        self,
        *,
        store: DestinationStore,
        index: ExternalIdIndex,
        summary: SyncSummary,
    ) -> None:
        self._store = store
        self._index = index
        self._summary = summary
        self._resolved: dict[tuple[EntityKind, str], DictionaryEntry] = {}

    async def resolve(
        self,
        kind: EntityKind,
        name: str | None,
        *,
        extra: Mapping[str, object] | None = None,
    ) -> DictionaryEntry | None:
        if kind not in DICTIONARY_KINDS:
            raise ValueError(f"{kind} is not a dictionary kind")
        if name is None or not name.strip():
            return None
        name = name.strip()

        cached = self._resolved.get((kind, name))
        if cached is not None:
            return cached

        stored = await self._index.find_by_name(kind, name)
        if stored is None:
            layout = DICTIONARY_LAYOUTS[kind]
            attributes: dict[str, object] = {"name": name}
            if layout.with_key:
                attributes["key"] = slugify(name)
            # only looked up for entries that are about to be created
            if layout.with_hex:
                attributes["hex"] = lookup_color_hex(name)
            if extra:
                attributes.update(extra)
            stored = await self._store.create(kind, attributes)
            self._summary.record_created(kind)
            log.info("Created %s %r with id %s", kind, name, stored.id)

        entry = _entry_from(kind, name, stored)
        self._resolved[(kind, name)] = entry
        return entry


def _entry_from(kind: EntityKind, name: str, stored: StoredRecord) -> DictionaryEntry:
    attributes = stored.attributes
    key = attributes.get("key")
    external_id = attributes.get(EXTERNAL_ID_FIELD)
    hex_value = attributes.get("hex")
    return DictionaryEntry(
        kind=kind,
        internal_id=stored.id,
        name=name,
        key=key if isinstance(key, str) else None,
        external_id=external_id if isinstance(external_id, int) else None,
        hex=hex_value if isinstance(hex_value, str) else None,
    )
